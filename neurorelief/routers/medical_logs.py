"""
Medical Logs API
Structured clinical notes: assessments, vitals, symptoms, medication effect, treatment
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from neurorelief.core.error_handling import ValidationFailure, internal_errors
from neurorelief.core.logging import log_audit
from neurorelief.dependencies import AuthContext, get_auth_context, get_storage
from neurorelief.models.medical_log import MedicalLogType
from neurorelief.schemas.common import MessageResponse
from neurorelief.schemas.medical_log import MedicalLogCreate, MedicalLogResponse, MedicalLogUpdate
from neurorelief.services.storage import DatabaseStorage

router = APIRouter(prefix="/api/medical-logs", tags=["Medical Logs"])


def _check_episode_reference(storage: DatabaseStorage, user_id: str, episode_id: Optional[int]) -> None:
    if episode_id is not None and storage.get_episode(user_id, episode_id) is None:
        raise ValidationFailure("episodeId does not match any of your episodes")


@router.post("", response_model=MedicalLogResponse)
def create_medical_log(
    log: MedicalLogCreate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("create medical log"):
        _check_episode_reference(storage, auth.user_id, log.episode_id)
        return storage.create_medical_log(auth.user_id, log.to_record())


@router.get("", response_model=List[MedicalLogResponse])
def list_medical_logs(
    limit: Optional[int] = Query(None, ge=1, le=500),
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("fetch medical logs"):
        return storage.get_medical_logs(auth.user_id, limit)


@router.get("/episode/{episode_id}", response_model=List[MedicalLogResponse])
def list_medical_logs_by_episode(
    episode_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("fetch medical logs"):
        return storage.get_medical_logs_by_episode(auth.user_id, episode_id)


@router.get("/type/{log_type}", response_model=List[MedicalLogResponse])
def list_medical_logs_by_type(
    log_type: MedicalLogType,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("fetch medical logs"):
        return storage.get_medical_logs_by_type(auth.user_id, log_type.value)


@router.patch("/{log_id}", response_model=MedicalLogResponse)
def update_medical_log(
    log_id: int,
    updates: MedicalLogUpdate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("update medical log"):
        _check_episode_reference(storage, auth.user_id, updates.episode_id)
        return storage.update_medical_log(auth.user_id, log_id, updates.to_record(partial=True))


@router.delete("/{log_id}", response_model=MessageResponse)
def delete_medical_log(
    log_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("delete medical log"):
        storage.delete_medical_log(auth.user_id, log_id)
        log_audit("MEDICAL_LOG_DELETED", auth.user_id, {"medical_log_id": log_id})
        return {"message": "Medical log deleted successfully"}
