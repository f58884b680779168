from sqlalchemy import Column, String, DateTime, Text, Integer, Boolean, JSON, ForeignKey
from sqlalchemy.sql import func
from neurorelief.database import Base


class Medication(Base):
    __tablename__ = "medications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    dosage = Column(String, nullable=False)
    frequency = Column(String, nullable=False)  # daily, as-needed, etc.
    side_effects = Column(JSON, nullable=True)

    # Medications are deactivated, never deleted
    is_active = Column(Boolean, default=True, index=True)

    created_at = Column(DateTime, server_default=func.now())


class MedicationLog(Base):
    """One intake of a medication, optionally tied to an episode"""
    __tablename__ = "medication_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    medication_id = Column(Integer, ForeignKey("medications.id"), nullable=True)
    episode_id = Column(Integer, ForeignKey("migraine_episodes.id"), nullable=True)

    taken_at = Column(DateTime, nullable=False, index=True)
    effectiveness = Column(Integer, nullable=True)  # 1-10 scale
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
