from typing import List

from fastapi import APIRouter, Depends

from neurorelief.core.error_handling import internal_errors
from neurorelief.dependencies import AuthContext, get_auth_context, get_storage
from neurorelief.schemas.trigger import TriggerCorrelationUpdate, TriggerCreate, TriggerResponse
from neurorelief.services.storage import DatabaseStorage

router = APIRouter(prefix="/api/triggers", tags=["Triggers"])


@router.post("", response_model=TriggerResponse)
def create_trigger(
    trigger: TriggerCreate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("create trigger"):
        return storage.create_trigger(auth.user_id, trigger.to_record())


@router.get("", response_model=List[TriggerResponse])
def list_triggers(
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    """Ordered by correlation score, strongest first"""
    with internal_errors("fetch triggers"):
        return storage.get_triggers(auth.user_id)


@router.patch("/{trigger_id}/correlation", response_model=TriggerResponse)
def update_trigger_correlation(
    trigger_id: int,
    update: TriggerCorrelationUpdate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("update trigger correlation"):
        return storage.update_trigger_correlation(auth.user_id, trigger_id, update.correlation_score)
