from sqlalchemy import Column, String, Integer, DateTime, Text, Boolean, JSON, ForeignKey
from sqlalchemy.sql import func
from neurorelief.database import Base


class Episode(Base):
    """
    A recorded migraine occurrence.
    Intensity is on a 1-10 scale; end_time stays empty while the episode is ongoing.
    """
    __tablename__ = "migraine_episodes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=True)
    intensity = Column(Integer, nullable=False)

    # Ordered label lists
    symptoms = Column(JSON, nullable=True)
    triggers = Column(JSON, nullable=True)

    notes = Column(Text, nullable=True)
    is_emergency = Column(Boolean, default=False)

    created_at = Column(DateTime, server_default=func.now())

    def duration_hours(self):
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds() / 3600
