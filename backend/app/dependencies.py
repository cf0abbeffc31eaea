import logging

from fastapi import Header
from jose import JWTError, jwt

from app.config import settings
from app.errors import AuthorizationError

logger = logging.getLogger(__name__)


async def get_current_user_id(authorization: str | None = Header(None)) -> str:
    """Resolve the caller's user id from a bearer JWT (``sub`` claim)."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthorizationError("Unauthorized", status_code=401)

    token = authorization.removeprefix("Bearer ").strip()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise AuthorizationError("Unauthorized", status_code=401)

    user_id = payload.get("sub")
    if not user_id:
        raise AuthorizationError("Unauthorized", status_code=401)
    return str(user_id)
