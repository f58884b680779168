from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from neurorelief.database import Base


class User(Base):
    """Account mirrored from the identity provider; id is the token subject"""
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
