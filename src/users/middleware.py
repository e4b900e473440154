from datetime import datetime, timezone

from django.conf import settings
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken, AccessToken


class JWTAuthCookieMiddleware:
    """
    Read JWT from httpOnly cookies and inject it as a Bearer Authorization header.
    An expired access token is silently re-issued from a valid refresh cookie.
    An explicit Authorization header from the client always wins.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.META.get('HTTP_AUTHORIZATION'):
            return self.get_response(request)

        access = self._valid_access(request.COOKIES.get('access_token'))
        if access:
            request.META['HTTP_AUTHORIZATION'] = f'Bearer {access}'
            return self.get_response(request)

        new_access = self._refreshed_access(request.COOKIES.get('refresh_token'))
        if new_access is None:
            return self.get_response(request)

        request.META['HTTP_AUTHORIZATION'] = f'Bearer {new_access}'
        response = self.get_response(request)
        response.set_cookie(
            key='access_token',
            value=str(new_access),
            httponly=True,
            secure=getattr(settings, 'AUTH_COOKIE_SECURE', not settings.DEBUG),
            samesite=getattr(settings, 'AUTH_COOKIE_SAMESITE', 'Lax'),
            expires=datetime.fromtimestamp(new_access['exp'], tz=timezone.utc),
            path='/',
        )
        return response

    @staticmethod
    def _valid_access(raw):
        if not raw:
            return None
        try:
            AccessToken(raw)  # verifies signature and expiry
        except TokenError:
            return None
        return raw

    @staticmethod
    def _refreshed_access(raw):
        if not raw:
            return None
        try:
            return RefreshToken(raw).access_token
        except TokenError:
            return None
