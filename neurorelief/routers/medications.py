"""
Medications API
Medication list management and medication intake logging
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from neurorelief.core.error_handling import NotFoundError, ValidationFailure, internal_errors
from neurorelief.dependencies import AuthContext, get_analytics, get_auth_context, get_storage
from neurorelief.schemas.common import MessageResponse
from neurorelief.schemas.medication import (
    EffectivenessResponse,
    MedicationCreate,
    MedicationLogCreate,
    MedicationLogResponse,
    MedicationResponse,
    MedicationUpdate,
)
from neurorelief.services.analytics import AnalyticsService
from neurorelief.services.storage import DatabaseStorage

router = APIRouter(prefix="/api/medications", tags=["Medications"])
logs_router = APIRouter(prefix="/api/medication-logs", tags=["Medications"])


# ==================== Medications ====================

@router.post("", response_model=MedicationResponse)
def create_medication(
    medication: MedicationCreate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("create medication"):
        return storage.create_medication(auth.user_id, medication.to_record())


@router.get("", response_model=List[MedicationResponse])
def list_medications(
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    """Active medications, newest first"""
    with internal_errors("fetch medications"):
        return storage.get_medications(auth.user_id)


@router.patch("/{medication_id}", response_model=MedicationResponse)
def update_medication(
    medication_id: int,
    updates: MedicationUpdate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("update medication"):
        return storage.update_medication(auth.user_id, medication_id, updates.to_record(partial=True))


@router.delete("/{medication_id}", response_model=MessageResponse)
def deactivate_medication(
    medication_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    """Medications are never removed, only marked inactive."""
    with internal_errors("deactivate medication"):
        storage.deactivate_medication(auth.user_id, medication_id)
        return {"message": "Medication deactivated successfully"}


@router.get("/{medication_id}/effectiveness", response_model=EffectivenessResponse)
def get_medication_effectiveness(
    medication_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage),
    analytics: AnalyticsService = Depends(get_analytics)
):
    with internal_errors("fetch medication effectiveness"):
        if storage.get_medication(auth.user_id, medication_id) is None:
            raise NotFoundError("Medication")

        mean = analytics.get_medication_effectiveness(auth.user_id, medication_id)
        return {"effectiveness": analytics.effectiveness_percent(mean)}


# ==================== Medication logs ====================

@logs_router.post("", response_model=MedicationLogResponse)
def create_medication_log(
    log: MedicationLogCreate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    """Taken-at defaults to now. Referenced medication/episode must belong to the caller."""
    with internal_errors("create medication log"):
        if log.medication_id is not None and storage.get_medication(auth.user_id, log.medication_id) is None:
            raise ValidationFailure("medicationId does not match any of your medications")
        if log.episode_id is not None and storage.get_episode(auth.user_id, log.episode_id) is None:
            raise ValidationFailure("episodeId does not match any of your episodes")

        return storage.create_medication_log(auth.user_id, log.to_record())


@logs_router.get("", response_model=List[MedicationLogResponse])
def list_medication_logs(
    limit: Optional[int] = Query(None, ge=1, le=500),
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("fetch medication logs"):
        return storage.get_medication_logs(auth.user_id, limit)
