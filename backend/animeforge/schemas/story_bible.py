from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Act(BaseModel):
    name: str = ""
    description: str = ""


class StoryBible(BaseModel):
    """The project's story document. Unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: Optional[str] = None
    logline: Optional[str] = None
    genre: Optional[str] = None
    setting: Optional[str] = None
    themes: Optional[List[str]] = None
    plot_summary: Optional[str] = Field(default=None, alias="plotSummary")
    world_rules: Optional[List[str]] = Field(default=None, alias="worldRules")
    acts: Optional[List[Act]] = None

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
