from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from rest_framework.authentication import TokenAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed


class BearerTokenAuthentication(TokenAuthentication):
    """
    Token auth accepting `Authorization: Bearer <key>` as well as DRF's
    `Token <key>`. Tokens older than TOKEN_TTL_HOURS are rejected and removed.
    """
    keyword = 'Bearer'
    accepted_keywords = (b'bearer', b'token')

    def authenticate(self, request):
        auth = get_authorization_header(request).split()

        if not auth or auth[0].lower() not in self.accepted_keywords:
            return None

        if len(auth) == 1:
            raise AuthenticationFailed('Invalid token header. No credentials provided.')
        elif len(auth) > 2:
            raise AuthenticationFailed('Invalid token header. Token string should not contain spaces.')

        try:
            key = auth[1].decode()
        except UnicodeError:
            raise AuthenticationFailed('Invalid token header. Token string should not contain invalid characters.')

        return self.authenticate_credentials(key)

    def authenticate_credentials(self, key):
        user, token = super().authenticate_credentials(key)

        expires_at = token.created + timedelta(hours=settings.TOKEN_TTL_HOURS)
        if timezone.now() >= expires_at:
            token.delete()
            raise AuthenticationFailed('Token has expired.')

        return user, token
