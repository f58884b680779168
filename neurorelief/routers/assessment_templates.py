from typing import List

from fastapi import APIRouter, Depends

from neurorelief.core.error_handling import internal_errors
from neurorelief.core.logging import log_audit
from neurorelief.dependencies import AuthContext, get_auth_context, get_storage
from neurorelief.schemas.common import MessageResponse
from neurorelief.schemas.medical_log import (
    AssessmentTemplateCreate,
    AssessmentTemplateResponse,
    AssessmentTemplateUpdate,
)
from neurorelief.services.storage import DatabaseStorage

router = APIRouter(prefix="/api/assessment-templates", tags=["Assessment Templates"])


@router.post("", response_model=AssessmentTemplateResponse)
def create_assessment_template(
    template: AssessmentTemplateCreate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("create assessment template"):
        return storage.create_assessment_template(auth.user_id, template.to_record())


@router.get("", response_model=List[AssessmentTemplateResponse])
def list_assessment_templates(
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    """Active templates only"""
    with internal_errors("fetch assessment templates"):
        return storage.get_assessment_templates(auth.user_id)


@router.patch("/{template_id}", response_model=AssessmentTemplateResponse)
def update_assessment_template(
    template_id: int,
    updates: AssessmentTemplateUpdate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("update assessment template"):
        return storage.update_assessment_template(auth.user_id, template_id, updates.to_record(partial=True))


@router.delete("/{template_id}", response_model=MessageResponse)
def delete_assessment_template(
    template_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("delete assessment template"):
        storage.delete_assessment_template(auth.user_id, template_id)
        log_audit("ASSESSMENT_TEMPLATE_DELETED", auth.user_id, {"template_id": template_id})
        return {"message": "Assessment template deleted successfully"}
