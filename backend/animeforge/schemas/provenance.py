from datetime import datetime
from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class ProvenanceEntry(BaseModel):
    id: int
    project_id: Optional[int] = None
    entity_type: str
    entity_id: str
    action: str
    user_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    prompt_hash: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ProvenanceSummary(BaseModel):
    total: int
    inserts: int
    updates: int
    deletes: int
    entity_types: List[str]
