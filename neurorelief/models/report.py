from sqlalchemy import Column, String, Integer, Date, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func
from neurorelief.database import Base
import enum


class ReportType(str, enum.Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class MedicalReport(Base):
    """
    Snapshot of episodes, medication intake and triggers over a date range.
    Written once by the report generator and never updated.
    """
    __tablename__ = "medical_reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    report_type = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    report_data = Column(JSON, nullable=False)

    generated_at = Column(DateTime, server_default=func.now(), index=True)
