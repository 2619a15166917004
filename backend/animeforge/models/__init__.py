from animeforge.db.base import Base
from .provenance import ProvenanceLog, ProvenanceAction
from .project import Project, ProjectStatus, FundingTier, DEFAULT_BONDING_CURVE_PRICE
from .character import CharacterSeed
from .panel import MangaPanel
from .director_choice import DirectorChoice
from .funding import FundingTransaction
from .profile import Profile, UserRole, AppRole

__all__ = [
    "Base",
    "ProvenanceLog",
    "ProvenanceAction",
    "Project",
    "ProjectStatus",
    "FundingTier",
    "DEFAULT_BONDING_CURVE_PRICE",
    "CharacterSeed",
    "MangaPanel",
    "DirectorChoice",
    "FundingTransaction",
    "Profile",
    "UserRole",
    "AppRole",
]
