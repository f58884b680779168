from datetime import datetime, timedelta
from typing import Optional, Dict, Any
import logging

from jose import JWTError, jwt
from neurorelief.config import settings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24 * 7


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token; used by the login bridge and by tests."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.get_token_secret(), algorithm=settings.TOKEN_ALGORITHM)


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify a bearer token issued after identity-provider login.
    Returns the claims, or None when the signature or expiry check fails.
    """
    try:
        return jwt.decode(token, settings.get_token_secret(), algorithms=[settings.TOKEN_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Token verification failed: {type(e).__name__}")
        return None
