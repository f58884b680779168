"""
Medical Reports API
Generates immutable report snapshots and serves previously generated ones
"""

from typing import List

from fastapi import APIRouter, Depends

from neurorelief.core.error_handling import NotFoundError, internal_errors
from neurorelief.dependencies import AuthContext, get_auth_context, get_report_generator, get_storage
from neurorelief.schemas.report import MedicalReportResponse, ReportGenerateRequest
from neurorelief.services.report_generator import ReportGenerator
from neurorelief.services.storage import DatabaseStorage

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.post("/generate", response_model=MedicalReportResponse)
def generate_report(
    request: ReportGenerateRequest,
    auth: AuthContext = Depends(get_auth_context),
    generator: ReportGenerator = Depends(get_report_generator)
):
    with internal_errors("generate report"):
        return generator.generate(
            auth.user_id,
            request.start_date,
            request.end_date,
            request.report_type
        )


@router.get("", response_model=List[MedicalReportResponse])
def list_reports(
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("fetch reports"):
        return storage.get_medical_reports(auth.user_id)


@router.get("/{report_id}", response_model=MedicalReportResponse)
def get_report(
    report_id: int,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("fetch report"):
        report = storage.get_medical_report(auth.user_id, report_id)
        if report is None:
            raise NotFoundError("Report")
        return report
