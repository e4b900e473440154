from rest_framework import permissions


class IsBookingRequesterOrStaff(permissions.BasePermission):
    """
    Read, cancel and pay: the requester or staff.
    approve/reject/edit/status: staff only.
    """
    requester_actions = ("cancel", "payment")

    def has_object_permission(self, request, view, obj):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if user.is_staff:
            return True

        action = getattr(view, "action", None)
        if request.method in permissions.SAFE_METHODS or action in self.requester_actions:
            return obj.requested_by_id == user.id
        return False


class IsPaymentPayerOrStaff(permissions.BasePermission):
    """Read and submit proof: the payer or staff. confirm/reject are staff only on the view."""

    def has_object_permission(self, request, view, obj):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        return user.is_staff or obj.payer_id == user.id
