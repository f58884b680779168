"""
Storage Service
Typed CRUD and query operations over the NeuroRelief tables

- Every read, update and delete is scoped to the owning user id here,
  callers never filter by user themselves
- Each operation uses its own session and commits at most once
- Lists default to most recent first
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from neurorelief.config import settings
from neurorelief.core.error_handling import NotFoundError, ValidationFailure
from neurorelief.models import (
    AssessmentTemplate,
    Episode,
    MedicalLog,
    MedicalReport,
    Medication,
    MedicationLog,
    Trigger,
    User,
)


def _check_episode_window(episode: Episode) -> None:
    if episode.end_time is not None and episode.end_time < episode.start_time:
        raise ValidationFailure("endTime must not be before startTime")


class DatabaseStorage:
    """Repository over the relational schema, built once per process."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _insert(self, record):
        with self._session() as db:
            db.add(record)
            db.commit()
            db.refresh(record)
            return record

    def _update_owned(
        self,
        model,
        entity: str,
        user_id: str,
        record_id: int,
        updates: Dict[str, Any],
        check: Optional[Callable[[Any], None]] = None,
    ):
        """`check` sees the merged record before commit; raising from it discards the update."""
        with self._session() as db:
            record = db.query(model).filter(
                model.id == record_id,
                model.user_id == user_id
            ).with_for_update().first()
            if record is None:
                raise NotFoundError(entity)

            for field, value in updates.items():
                setattr(record, field, value)

            if check is not None:
                check(record)

            db.commit()
            db.refresh(record)
            return record

    def _delete_owned(self, model, entity: str, user_id: str, record_id: int) -> None:
        with self._session() as db:
            deleted = db.query(model).filter(
                model.id == record_id,
                model.user_id == user_id
            ).delete(synchronize_session=False)
            if not deleted:
                raise NotFoundError(entity)
            db.commit()

    @staticmethod
    def _limit(limit: Optional[int]) -> int:
        if limit is None:
            return settings.DEFAULT_LIST_LIMIT
        return max(1, min(limit, settings.MAX_LIST_LIMIT))

    # ==================== Users ====================

    def get_user(self, user_id: str) -> Optional[User]:
        with self._session() as db:
            return db.query(User).filter(User.id == user_id).first()

    def upsert_user(self, user_id: str, **profile: Any) -> User:
        with self._session() as db:
            user = db.query(User).filter(User.id == user_id).first()
            if user is None:
                user = User(id=user_id, **profile)
                db.add(user)
            else:
                for field, value in profile.items():
                    setattr(user, field, value)
                user.updated_at = datetime.now()
            db.commit()
            db.refresh(user)
            return user

    def register_user(self, user_id: str, **profile: Any) -> User:
        """
        Create the row for a subject seen for the first time.

        An email already held by another user is stored as empty.
        When the same subject registers concurrently, the row that won is returned.
        """
        email = profile.get("email")
        with self._session() as db:
            if email and db.query(User).filter(User.email == email, User.id != user_id).first():
                profile["email"] = None

            user = User(id=user_id, **profile)
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                existing = db.query(User).filter(User.id == user_id).first()
                if existing is not None:
                    return existing
                if not profile.get("email"):
                    raise
                # Email claimed by another subject after the check above
                profile["email"] = None
                user = User(id=user_id, **profile)
                db.add(user)
                db.commit()

            db.refresh(user)
            return user

    # ==================== Episodes ====================

    def create_episode(self, user_id: str, data: Dict[str, Any]) -> Episode:
        return self._insert(Episode(user_id=user_id, **data))

    def get_episodes(self, user_id: str, limit: Optional[int] = None) -> List[Episode]:
        with self._session() as db:
            return db.query(Episode).filter(
                Episode.user_id == user_id
            ).order_by(desc(Episode.start_time), desc(Episode.id)).limit(self._limit(limit)).all()

    def get_episode(self, user_id: str, episode_id: int) -> Optional[Episode]:
        with self._session() as db:
            return db.query(Episode).filter(
                Episode.id == episode_id,
                Episode.user_id == user_id
            ).first()

    def get_episodes_by_date_range(self, user_id: str, start: datetime, end: datetime) -> List[Episode]:
        """Episodes whose start time falls within [start, end]"""
        with self._session() as db:
            return db.query(Episode).filter(
                Episode.user_id == user_id,
                Episode.start_time >= start,
                Episode.start_time <= end
            ).order_by(desc(Episode.start_time), desc(Episode.id)).all()

    def count_episodes_since(self, user_id: str, since: datetime) -> int:
        with self._session() as db:
            return db.query(func.count(Episode.id)).filter(
                Episode.user_id == user_id,
                Episode.start_time >= since
            ).scalar() or 0

    def update_episode(self, user_id: str, episode_id: int, updates: Dict[str, Any]) -> Episode:
        return self._update_owned(
            Episode, "Episode", user_id, episode_id, updates, check=_check_episode_window
        )

    # ==================== Medications ====================

    def create_medication(self, user_id: str, data: Dict[str, Any]) -> Medication:
        return self._insert(Medication(user_id=user_id, **data))

    def get_medications(self, user_id: str) -> List[Medication]:
        """Active medications only"""
        with self._session() as db:
            return db.query(Medication).filter(
                Medication.user_id == user_id,
                Medication.is_active == True  # noqa: E712
            ).order_by(desc(Medication.created_at), desc(Medication.id)).all()

    def get_medication(self, user_id: str, medication_id: int) -> Optional[Medication]:
        with self._session() as db:
            return db.query(Medication).filter(
                Medication.id == medication_id,
                Medication.user_id == user_id
            ).first()

    def update_medication(self, user_id: str, medication_id: int, updates: Dict[str, Any]) -> Medication:
        return self._update_owned(Medication, "Medication", user_id, medication_id, updates)

    def deactivate_medication(self, user_id: str, medication_id: int) -> Medication:
        return self.update_medication(user_id, medication_id, {"is_active": False})

    # ==================== Medication logs ====================

    def create_medication_log(self, user_id: str, data: Dict[str, Any]) -> MedicationLog:
        return self._insert(MedicationLog(user_id=user_id, **data))

    def get_medication_logs(self, user_id: str, limit: Optional[int] = None) -> List[MedicationLog]:
        with self._session() as db:
            return db.query(MedicationLog).filter(
                MedicationLog.user_id == user_id
            ).order_by(desc(MedicationLog.taken_at), desc(MedicationLog.id)).limit(self._limit(limit)).all()

    def get_medication_logs_by_date_range(self, user_id: str, start: datetime, end: datetime) -> List[MedicationLog]:
        with self._session() as db:
            return db.query(MedicationLog).filter(
                MedicationLog.user_id == user_id,
                MedicationLog.taken_at >= start,
                MedicationLog.taken_at <= end
            ).order_by(desc(MedicationLog.taken_at), desc(MedicationLog.id)).all()

    def count_medication_logs_since(self, user_id: str, since: datetime) -> int:
        with self._session() as db:
            return db.query(func.count(MedicationLog.id)).filter(
                MedicationLog.user_id == user_id,
                MedicationLog.taken_at >= since
            ).scalar() or 0

    def get_medication_effectiveness(self, user_id: str, medication_id: int) -> float:
        """Mean effectiveness (1-10) over logs that recorded one, 0 when none"""
        with self._session() as db:
            average = db.query(func.avg(MedicationLog.effectiveness)).filter(
                MedicationLog.user_id == user_id,
                MedicationLog.medication_id == medication_id
            ).scalar()
            return float(average) if average is not None else 0.0

    # ==================== Triggers ====================

    def create_trigger(self, user_id: str, data: Dict[str, Any]) -> Trigger:
        return self._insert(Trigger(user_id=user_id, **data))

    def get_triggers(self, user_id: str) -> List[Trigger]:
        """Strongest correlation first; unscored triggers last"""
        with self._session() as db:
            return db.query(Trigger).filter(
                Trigger.user_id == user_id
            ).order_by(desc(Trigger.correlation_score).nulls_last(), Trigger.id).all()

    def update_trigger_correlation(self, user_id: str, trigger_id: int, correlation_score: float) -> Trigger:
        return self._update_owned(Trigger, "Trigger", user_id, trigger_id, {"correlation_score": correlation_score})

    # ==================== Medical reports ====================

    def create_medical_report(self, user_id: str, data: Dict[str, Any]) -> MedicalReport:
        return self._insert(MedicalReport(user_id=user_id, **data))

    def get_medical_reports(self, user_id: str) -> List[MedicalReport]:
        with self._session() as db:
            return db.query(MedicalReport).filter(
                MedicalReport.user_id == user_id
            ).order_by(desc(MedicalReport.generated_at), desc(MedicalReport.id)).all()

    def get_medical_report(self, user_id: str, report_id: int) -> Optional[MedicalReport]:
        with self._session() as db:
            return db.query(MedicalReport).filter(
                MedicalReport.id == report_id,
                MedicalReport.user_id == user_id
            ).first()

    # ==================== Medical logs ====================

    def create_medical_log(self, user_id: str, data: Dict[str, Any]) -> MedicalLog:
        return self._insert(MedicalLog(user_id=user_id, **data))

    def get_medical_logs(self, user_id: str, limit: Optional[int] = None) -> List[MedicalLog]:
        with self._session() as db:
            return db.query(MedicalLog).filter(
                MedicalLog.user_id == user_id
            ).order_by(desc(MedicalLog.timestamp), desc(MedicalLog.id)).limit(self._limit(limit)).all()

    def get_medical_logs_by_episode(self, user_id: str, episode_id: int) -> List[MedicalLog]:
        with self._session() as db:
            return db.query(MedicalLog).filter(
                MedicalLog.user_id == user_id,
                MedicalLog.episode_id == episode_id
            ).order_by(desc(MedicalLog.timestamp), desc(MedicalLog.id)).all()

    def get_medical_logs_by_type(self, user_id: str, log_type: str) -> List[MedicalLog]:
        with self._session() as db:
            return db.query(MedicalLog).filter(
                MedicalLog.user_id == user_id,
                MedicalLog.log_type == log_type
            ).order_by(desc(MedicalLog.timestamp), desc(MedicalLog.id)).all()

    def update_medical_log(self, user_id: str, log_id: int, updates: Dict[str, Any]) -> MedicalLog:
        return self._update_owned(MedicalLog, "Medical log", user_id, log_id, updates)

    def delete_medical_log(self, user_id: str, log_id: int) -> None:
        self._delete_owned(MedicalLog, "Medical log", user_id, log_id)

    # ==================== Assessment templates ====================

    def create_assessment_template(self, user_id: str, data: Dict[str, Any]) -> AssessmentTemplate:
        return self._insert(AssessmentTemplate(user_id=user_id, **data))

    def get_assessment_templates(self, user_id: str) -> List[AssessmentTemplate]:
        """Active templates only"""
        with self._session() as db:
            return db.query(AssessmentTemplate).filter(
                AssessmentTemplate.user_id == user_id,
                AssessmentTemplate.is_active == True  # noqa: E712
            ).order_by(desc(AssessmentTemplate.created_at), desc(AssessmentTemplate.id)).all()

    def update_assessment_template(self, user_id: str, template_id: int, updates: Dict[str, Any]) -> AssessmentTemplate:
        return self._update_owned(AssessmentTemplate, "Assessment template", user_id, template_id, updates)

    def delete_assessment_template(self, user_id: str, template_id: int) -> None:
        self._delete_owned(AssessmentTemplate, "Assessment template", user_id, template_id)
