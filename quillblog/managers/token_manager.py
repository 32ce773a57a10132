"""
Identity token verification.

Tokens are issued by the external identity provider; this service only
verifies them and extracts the caller identity.
"""

from jose import JWTError, jwt
from pydantic import ValidationError

from quillblog.configs.settings import settings
from quillblog.monitoring.logging import get_logger
from quillblog.schemas.user import CallerIdentity

logger = get_logger(__name__)


def decode_identity_token(token: str) -> CallerIdentity | None:
    """
    Decode and validate an identity token.

    The `sub` claim is the caller identity; `email` and `username` are
    optional profile claims.

    Args:
        token: JWT token string

    Returns:
        CallerIdentity | None: Caller identity or None if the token is invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.IDENTITY_SECRET_KEY.get_secret_value(),
            algorithms=[settings.IDENTITY_ALGORITHM],
            audience=settings.IDENTITY_AUDIENCE,
            issuer=settings.IDENTITY_ISSUER,
            options={"verify_aud": settings.IDENTITY_AUDIENCE is not None},
        )
    except JWTError as e:
        logger.debug("Rejected identity token", error=str(e))
        return None

    try:
        return CallerIdentity(
            user_id=payload.get("sub") or "",
            email=payload.get("email"),
            username=payload.get("username"),
        )
    except ValidationError:
        logger.debug("Identity token carries no subject")
        return None
