from .project import Project, ProjectCreate, ProjectUpdate
from .story_bible import StoryBible, Act
from .character import Character, CharacterCreate, CharacterUpdate, CharacterDeleted
from .panel import Panel, PanelCreate, PanelUpdate
from .variation import (
    Variation,
    GenerateVariationsRequest,
    GenerateVariationsResponse,
    VariationSet,
    DirectorChoiceSelect,
)
from .funding import FundRequest, FundingQuote, FundingReceipt
from .provenance import ProvenanceEntry, ProvenanceSummary
from .profile import Profile, ProfileUpdate, Me
from .draft import DraftMessage, DraftChatRequest, DraftStarter
from .studio import StudioState

__all__ = [
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "StoryBible",
    "Act",
    "Character",
    "CharacterCreate",
    "CharacterUpdate",
    "CharacterDeleted",
    "Panel",
    "PanelCreate",
    "PanelUpdate",
    "Variation",
    "GenerateVariationsRequest",
    "GenerateVariationsResponse",
    "VariationSet",
    "DirectorChoiceSelect",
    "FundRequest",
    "FundingQuote",
    "FundingReceipt",
    "ProvenanceEntry",
    "ProvenanceSummary",
    "Profile",
    "ProfileUpdate",
    "Me",
    "DraftMessage",
    "DraftChatRequest",
    "DraftStarter",
    "StudioState",
]
