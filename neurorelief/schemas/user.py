from datetime import datetime
from typing import Optional

from neurorelief.schemas.common import RecordResponse


class UserResponse(RecordResponse):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
