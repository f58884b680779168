from fastapi import APIRouter, Depends

from neurorelief.core.error_handling import NotFoundError, internal_errors
from neurorelief.dependencies import AuthContext, get_auth_context, get_storage
from neurorelief.schemas.user import UserResponse
from neurorelief.services.storage import DatabaseStorage

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.get("/user", response_model=UserResponse)
def get_authenticated_user(
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("fetch user"):
        user = storage.get_user(auth.user_id)
        if user is None:
            raise NotFoundError("User")
        return user
