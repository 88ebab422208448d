# core/auth.py
# Verify the bearer token that accompanies every request

import logging
import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.authentication import BaseAuthentication

from .exceptions import AuthenticationError, NotFoundError
from .validators import normalize_email

logger = logging.getLogger("hackathon.core")


class AuthGateway:
    """
    Checks a token against the identity the caller claims.

    Tokens are HS256 JWTs issued by the accounts service; the ``email``
    claim must match the claimed email.
    """

    def __init__(self, secret=None, algorithm=None):
        self.secret = secret or settings.JWT_SECRET
        self.algorithm = algorithm or getattr(settings, "JWT_ALGORITHM", "HS256")

    def decode(self, token: str) -> dict:
        return jwt.decode(token, self.secret, algorithms=[self.algorithm])

    def verify(self, token: str, claimed_email: str) -> bool:
        if not token or not claimed_email:
            return False
        try:
            payload = self.decode(token)
        except jwt.ExpiredSignatureError:
            logger.info(f"Expired token presented for {claimed_email}")
            return False
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid token: {e}")
            return False
        return normalize_email(payload.get("email")) == normalize_email(claimed_email)


class BodyTokenAuthentication(BaseAuthentication):
    """
    DRF authentication reading ``auth_email`` + ``auth_token`` from the body.

    ``Authorization: Bearer <token>`` is accepted in place of ``auth_token``.
    No credentials at all -> None (IsAuthenticated then answers 401).
    A bad token -> 401. A good token for an unknown account -> 404.
    """

    keyword = "Bearer"

    def __init__(self, gateway=None):
        self.gateway = gateway or AuthGateway()

    def authenticate(self, request):
        data = request.data if hasattr(request.data, "get") else {}
        email = normalize_email(data.get("auth_email"))
        token = data.get("auth_token") or self._header_token(request)

        if not email and not token:
            return None  # Let IsAuthenticated reject it

        if not self.gateway.verify(token, email):
            raise AuthenticationError("Unauthorized - Invalid token")

        User = get_user_model()
        try:
            user = User.objects.get(email=email)
        except User.DoesNotExist:
            raise NotFoundError("Auth user not found")

        return (user, token)

    def authenticate_header(self, request):
        return self.keyword

    def _header_token(self, request):
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith(f"{self.keyword} "):
            return None
        return auth_header.split(" ", 1)[1].strip()
