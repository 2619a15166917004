from datetime import datetime
from pydantic import BaseModel
from typing import Any, Dict, Optional


class PanelCreate(BaseModel):
    project_id: int
    chapter_number: int = 1
    page_number: int = 1


class PanelUpdate(BaseModel):
    chapter_number: Optional[int] = None
    page_number: Optional[int] = None
    panel_position: Optional[int] = None
    description: Optional[str] = None
    dialogue: Optional[str] = None
    prompt_data: Optional[Dict[str, Any]] = None


class Panel(BaseModel):
    id: int
    project_id: int
    chapter_number: int
    page_number: int
    panel_position: int
    description: Optional[str] = None
    dialogue: Optional[str] = None
    prompt_data: Optional[Dict[str, Any]] = None
    image_url: Optional[str] = None
    is_keyframe: bool
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
