from datetime import datetime
from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class CharacterBase(BaseModel):
    name: str = "New Character"
    role: str = "supporting"
    personality: List[str] = ["Mysterious"]
    abilities: List[str] = []
    style_dna: Dict[str, Any] = {}
    appearance: Optional[str] = None
    backstory: Optional[str] = None


class CharacterCreate(CharacterBase):
    project_id: int


class CharacterUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[str] = None
    personality: Optional[List[str]] = None
    abilities: Optional[List[str]] = None
    style_dna: Optional[Dict[str, Any]] = None
    appearance: Optional[str] = None
    backstory: Optional[str] = None


class Character(CharacterBase):
    id: int
    project_id: int
    reference_image_url: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CharacterDeleted(BaseModel):
    deleted_id: int
    # what the vault selects next; None when the roster is empty
    next_selected: Optional[Character] = None
