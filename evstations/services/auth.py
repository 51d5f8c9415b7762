"""
Caller identity verification.
Access tokens are issued by the external authentication service; this
module only checks them and extracts the caller id.
"""
from typing import Optional
import jwt
from evstations.config import get_settings
from evstations.errors import AuthenticationError


class AuthService:
    """Verifies bearer access tokens."""

    def __init__(self):
        self.settings = get_settings()

    def decode_token(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Token is not valid") from e

    def verify_access_token(self, token: Optional[str]) -> str:
        """Return the caller id carried by an access token."""
        if not token:
            raise AuthenticationError("No token, authorization denied")
        data = self.decode_token(token)
        if data.get("scope", "access") != "access":
            raise AuthenticationError("Token is not valid")
        caller_id = data.get("sub") or data.get("id")
        if not caller_id:
            raise AuthenticationError("Token is not valid")
        return str(caller_id)

    @staticmethod
    def bearer_token(authorization: Optional[str]) -> Optional[str]:
        """Extract the token from an Authorization header value."""
        if not authorization:
            return None
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer":
            return None
        return token.strip() or None


# Singleton instance
_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get auth service singleton."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
