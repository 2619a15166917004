from typing import List, Optional
from pydantic import BaseModel, Field


class Variation(BaseModel):
    id: str
    description: str
    prompt: str
    style_notes: str = ""
    preview_url: Optional[str] = None


class GenerateVariationsRequest(BaseModel):
    """Body of the generation endpoint; keys match the web client."""

    panelDescription: str = "Anime scene"
    dialogue: Optional[str] = None
    characterContext: Optional[str] = None
    stylePreferences: Optional[List[str]] = None


class GenerateVariationsResponse(BaseModel):
    variations: List[Variation]


class VariationSet(BaseModel):
    """What Director's Choice shows: always four variations."""

    panel_id: int
    variations: List[Variation] = Field(..., min_length=4, max_length=4)
    # rate_limited / payment_required / generation_failed, None on success
    notice: Optional[str] = None
    message: Optional[str] = None


class DirectorChoiceSelect(BaseModel):
    variations: List[Variation] = Field(..., min_length=4, max_length=4)
    selected_index: int = Field(..., ge=0)
