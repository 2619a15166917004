from typing import List, Literal
from pydantic import BaseModel, Field


class DraftMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class DraftChatRequest(BaseModel):
    # full conversation so far; the last entry is the new user message
    messages: List[DraftMessage] = Field(..., min_length=1)


class DraftStarter(BaseModel):
    welcome: DraftMessage
    quick_prompts: List[str]
