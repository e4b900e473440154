import logging

from django.db import DatabaseError
from rest_framework import permissions
from rest_framework.response import Response

from ..exceptions import BookingError, UnexpectedError, ZoneNotFound
from ..models import Zone
from ..throttling import ScopedRateThrottleIsolated, READ_SCOPE

logger = logging.getLogger(__name__)


def client_ip(request):
    xff = (request.META.get('HTTP_X_FORWARDED_FOR') or '').split(',')[0].strip()
    return xff or request.META.get('REMOTE_ADDR') or ''


def get_active_zone(zone_id):
    try:
        return Zone.objects.select_related('country', 'region').get(pk=zone_id, is_active=True)
    except Zone.DoesNotExist:
        raise ZoneNotFound()


class BookingErrorMixin:
    """
    Turn service errors into {"success": false, "error": CODE, "detail": ...}.
    Database failures are logged and reported as UNEXPECTED_ERROR.
    """
    def handle_exception(self, exc):
        if isinstance(exc, DatabaseError):
            logger.exception("database error in %s", self.__class__.__name__)
            exc = UnexpectedError()
        if isinstance(exc, BookingError):
            logger.warning(
                "%s %s rejected: %s %s",
                self.request.method, self.request.path, exc.code, exc.detail,
            )
            return Response(exc.as_dict(), status=exc.status_code)
        return super().handle_exception(exc)


class PublicReadMixin:
    permission_classes = [permissions.AllowAny]
    throttle_classes = (ScopedRateThrottleIsolated,)
    throttle_scope = READ_SCOPE
