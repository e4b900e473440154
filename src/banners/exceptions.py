"""
Booking errors.

Services raise these; the API layer turns them into
``{"success": false, "error": <code>, "detail": <message>}`` responses.
"""
from rest_framework import status


class BookingError(Exception):
    code = "BOOKING_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "The booking request could not be processed."

    def __init__(self, detail=None, **extra):
        self.detail = detail or self.default_detail
        self.extra = extra
        super().__init__(self.detail)

    def as_dict(self):
        return {"success": False, "error": self.code, "detail": self.detail, **self.extra}


class SlotUnavailable(BookingError):
    code = "SLOT_UNAVAILABLE"
    status_code = status.HTTP_409_CONFLICT
    default_detail = "These dates are already reserved for this slot."


class InvalidFormat(BookingError):
    code = "INVALID_FORMAT"
    default_detail = "This position does not accept the selected banner format."


class InvalidDuration(BookingError):
    code = "INVALID_DURATION"
    default_detail = "Invalid booking duration."


class InvalidDateRange(BookingError):
    code = "INVALID_DATE_RANGE"
    default_detail = "End date must not be before start date."


class LeadTimeViolation(BookingError):
    code = "LEAD_TIME_VIOLATION"
    default_detail = "Start date is too soon."


class ZoneNotFound(BookingError):
    code = "ZONE_NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Advertising is not offered here."


class InvalidTransition(BookingError):
    code = "INVALID_TRANSITION"
    default_detail = "This status change is not allowed."


class RequesterSuspended(BookingError):
    code = "REQUESTER_SUSPENDED"
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Your account is suspended."


class UploadFailure(BookingError):
    code = "UPLOAD_FAILURE"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Banner upload failed, please try again."


class UnexpectedError(BookingError):
    code = "UNEXPECTED_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Unexpected error."


class PaymentNotAllowed(BookingError):
    code = "PAYMENT_NOT_ALLOWED"
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Only the requester can pay for this booking."


class InvalidPaymentState(BookingError):
    code = "INVALID_PAYMENT_STATE"
    status_code = status.HTTP_409_CONFLICT
    default_detail = "This payment cannot be changed in its current state."


class PaymentProofRequired(BookingError):
    code = "PAYMENT_PROOF_REQUIRED"
    default_detail = "Attach a receipt URL or describe the transfer."
