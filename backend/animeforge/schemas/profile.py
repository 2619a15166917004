from datetime import datetime
from pydantic import BaseModel
from typing import List, Optional

from animeforge.models.profile import AppRole


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None


class Profile(BaseModel):
    id: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class Me(BaseModel):
    user_id: str
    email: Optional[str] = None
    profile: Profile
    roles: List[AppRole]
