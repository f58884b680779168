from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey
from sqlalchemy.sql import func
from neurorelief.database import Base


class Trigger(Base):
    __tablename__ = "triggers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    category = Column(String, nullable=False)  # sleep, stress, food, weather, etc.
    correlation_score = Column(Float, nullable=True)  # 0-1 scale
    frequency = Column(Integer, default=0)
    last_occurrence = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
