"""Authentication dependencies and utilities."""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from benchmap.core.config import settings

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def decode_actor_id(token: str) -> Optional[str]:
    """
    Validate a bearer JWT and return its subject.

    The token is issued by the external auth provider and signed with
    AUTH_JWT_SECRET. Returns None when the signature, expiry, audience or
    subject claim is invalid.
    """
    options = {}
    if not settings.AUTH_JWT_AUDIENCE:
        options["verify_aud"] = False

    try:
        payload = jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
            options=options,
        )
    except JWTError as e:
        logger.warning(f"[AUTH] JWT validation failed: {type(e).__name__}: {str(e)}")
        return None

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("[AUTH] JWT payload missing 'sub' claim")
        return None
    return str(user_id)


def get_optional_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Actor id for the request, or None for anonymous callers."""
    if credentials is None:
        return None
    return decode_actor_id(credentials.credentials)


def get_current_user_id(
    user_id: Optional[str] = Depends(get_optional_user_id),
) -> str:
    """Actor id for the request; 401 when the caller is not signed in."""
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user_id
