from neurorelief.models.user import User
from neurorelief.models.episode import Episode
from neurorelief.models.medication import Medication, MedicationLog
from neurorelief.models.trigger import Trigger
from neurorelief.models.medical_log import MedicalLog, MedicalLogType, AssessmentTemplate
from neurorelief.models.report import MedicalReport, ReportType

__all__ = [
    "User",
    "Episode",
    "Medication",
    "MedicationLog",
    "Trigger",
    "MedicalLog",
    "MedicalLogType",
    "AssessmentTemplate",
    "MedicalReport",
    "ReportType",
]
