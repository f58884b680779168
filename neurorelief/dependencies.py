"""
Request dependencies
Authenticated context and service objects injected into route handlers
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from neurorelief.services.analytics import AnalyticsService
from neurorelief.services.report_generator import ReportGenerator
from neurorelief.services.storage import DatabaseStorage
from neurorelief.utils.security import verify_token

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """The caller, as established by the identity provider's token"""
    user_id: str


def get_storage(request: Request) -> DatabaseStorage:
    return request.app.state.storage


def get_analytics(storage: DatabaseStorage = Depends(get_storage)) -> AnalyticsService:
    return AnalyticsService(storage)


def get_report_generator(storage: DatabaseStorage = Depends(get_storage)) -> ReportGenerator:
    return ReportGenerator(storage)


def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    storage: DatabaseStorage = Depends(get_storage)
) -> AuthContext:
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise unauthorized

    payload = verify_token(credentials.credentials)
    if payload is None:
        raise unauthorized

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise unauthorized

    # First request from a new subject creates the local user row
    if storage.get_user(user_id) is None:
        storage.register_user(
            user_id,
            email=payload.get("email"),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            profile_image_url=payload.get("profile_image_url"),
        )
        logger.info("Registered new user from token claims")

    return AuthContext(user_id=user_id)
