from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer

from ..core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS
from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class Principal:
    """Verified caller identity: just the claims the identity provider signed."""

    email: Optional[str]
    name: Optional[str] = None


class TokenVerifier:
    """Signs and verifies bearer tokens carrying an email claim."""

    _salt = "committee-attendance-auth"

    def __init__(self, secret_key: str, *, max_age_seconds: int = DEFAULT_TOKEN_MAX_AGE_SECONDS):
        self._serializer = URLSafeTimedSerializer(secret_key, salt=self._salt)
        self._max_age = int(max_age_seconds)

    def issue(self, email: str, *, name: Optional[str] = None) -> str:
        claims = {"email": email}
        if name:
            claims["name"] = name
        return self._serializer.dumps(claims)

    def verify(self, token: Optional[str]) -> Principal:
        if not token:
            raise AuthenticationError("Unauthorized", reason="missing_token")
        try:
            claims = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise AuthenticationError("Token expired", reason="token_expired")
        except BadData:
            raise AuthenticationError("Invalid token", reason="invalid_token")

        if not isinstance(claims, dict):
            raise AuthenticationError("Invalid token", reason="invalid_token")
        email = claims.get("email")
        name = claims.get("name")
        return Principal(
            email=email if isinstance(email, str) else None,
            name=name if isinstance(name, str) else None,
        )


def bearer_token(header_value: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None
