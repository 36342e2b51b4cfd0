"""Bearer token verification.

Tokens are issued by the external identity provider; this service only
verifies them and reads the ``sub`` claim.
"""

from typing import Any, Dict, Optional

from jose import JWTError, jwt

from marketplace.config import Settings, settings as default_settings


class InvalidTokenError(Exception):
    """Bearer token is malformed, expired or not signed by the identity provider."""
    pass


def decode_access_token(token: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Verify token signature and standard claims and return the claims.

    Raises:
        InvalidTokenError: If verification fails
    """
    settings = settings or default_settings
    try:
        return jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=settings.auth_jwt_algorithms,
            audience=settings.auth_audience,
            issuer=settings.auth_issuer,
            options={"verify_aud": settings.auth_audience is not None},
        )
    except JWTError as exc:
        raise InvalidTokenError("Invalid token") from exc


def get_subject(token: str, settings: Optional[Settings] = None) -> str:
    """Return the caller subject carried by a verified token."""
    claims = decode_access_token(token, settings)
    subject = claims.get("sub")
    if not subject:
        raise InvalidTokenError("Token has no subject")
    return subject
