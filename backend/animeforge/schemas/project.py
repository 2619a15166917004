from datetime import datetime
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

from animeforge.models.project import ProjectStatus, FundingTier


class ProjectBase(BaseModel):
    name: str
    description: Optional[str] = None
    genre: Optional[str] = None


class ProjectCreate(BaseModel):
    name: str = "Untitled Project"
    description: Optional[str] = "A new anime creation"
    genre: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    genre: Optional[str] = None
    status: Optional[ProjectStatus] = None
    funding_tier: Optional[FundingTier] = None
    funding_goal: Optional[float] = Field(default=None, ge=0)
    cover_image_url: Optional[str] = None


class Project(ProjectBase):
    id: int
    status: ProjectStatus
    funding_tier: FundingTier
    funding_goal: Optional[float] = None
    funding_current: Optional[float] = None
    funding_percentage: Optional[float] = None
    bonding_curve_price: Optional[float] = None
    cover_image_url: Optional[str] = None
    story_bible: Optional[Dict[str, Any]] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
