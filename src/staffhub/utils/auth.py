import logging

import jwt

from staffhub.config import get_settings

logger = logging.getLogger(__name__)


def decode_jwt(token: str) -> dict | None:
    """Verify and decode a bearer token issued by the login service. Returns None when invalid."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_alg])
    except jwt.ExpiredSignatureError:
        logger.debug("JWT decode failed: token expired")
        return None
    except jwt.InvalidTokenError as exc:
        # Signature invalid or other token errors
        logger.debug("JWT decode failed: invalid token (%s)", exc)
        return None


def parse_role_claim(value) -> int | None:
    """Role ids travel as ints or numeric strings; anything else means no role."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
