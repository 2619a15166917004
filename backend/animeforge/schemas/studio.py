from typing import List
from pydantic import BaseModel

from .project import Project
from .character import Character
from .panel import Panel


class StudioState(BaseModel):
    project: Project
    characters: List[Character]
    panels: List[Panel]
    # last page that holds a panel, at least 1
    max_page: int = 1
