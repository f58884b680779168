"""
Medical Log Models - structured clinical notes kept alongside episodes
Covers assessments, vitals, symptom notes, medication response and treatment
"""

from datetime import datetime

from sqlalchemy import Column, String, Integer, DateTime, Text, Boolean, JSON, ForeignKey
from sqlalchemy.sql import func
from neurorelief.database import Base
import enum


class MedicalLogType(str, enum.Enum):
    """Kinds of medical log entries"""
    ASSESSMENT = "assessment"
    VITALS = "vitals"
    SYMPTOMS = "symptoms"
    MEDICATION_EFFECT = "medication_effect"
    TREATMENT = "treatment"


class MedicalLog(Base):
    __tablename__ = "medical_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    episode_id = Column(Integer, ForeignKey("migraine_episodes.id"), nullable=True, index=True)

    log_type = Column(String, nullable=False, index=True)
    severity = Column(Integer, nullable=True)  # 1-10 pain/symptom severity

    # {"bloodPressure": "120/80", "heartRate": 72, "temperature": 36.8}
    vital_signs = Column(JSON, nullable=True)

    symptoms = Column(JSON, nullable=True)
    pain_location = Column(String, nullable=True)  # frontal, temporal, occipital, etc.
    pain_quality = Column(String, nullable=True)  # throbbing, sharp, dull, etc.
    associated_symptoms = Column(JSON, nullable=True)
    triggers = Column(JSON, nullable=True)

    medication_response = Column(Integer, nullable=True)  # 1-10 effectiveness
    functional_impact = Column(Integer, nullable=True)  # 1-10 disability level
    environmental_factors = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)

    timestamp = Column(DateTime, nullable=False, default=datetime.now, index=True)
    created_at = Column(DateTime, server_default=func.now())


class AssessmentTemplate(Base):
    """Reusable questionnaire (pre_episode, during_episode, post_episode, ...)"""
    __tablename__ = "assessment_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    template_name = Column(String, nullable=False)
    template_type = Column(String, nullable=False)
    questions = Column(JSON, nullable=False)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime, server_default=func.now())
