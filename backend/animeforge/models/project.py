import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, Float, JSON, Enum
from sqlalchemy.orm import relationship

from animeforge.db.base import Base
from animeforge.models.provenance import audited


class ProjectStatus(str, enum.Enum):
    draft = "draft"
    pilot = "pilot"
    funding = "funding"
    funded = "funded"
    production = "production"
    completed = "completed"


class FundingTier(str, enum.Enum):
    seed = "seed"
    hype = "hype"
    production = "production"
    premiere = "premiere"


DEFAULT_BONDING_CURVE_PRICE = 0.01


@audited
class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    genre = Column(String(255), nullable=True)

    status = Column(Enum(ProjectStatus), default=ProjectStatus.draft, nullable=False)
    funding_tier = Column(Enum(FundingTier), default=FundingTier.seed, nullable=False)

    funding_goal = Column(Float, default=10000.0)
    funding_current = Column(Float, default=0.0)
    funding_percentage = Column(Float, default=0.0)
    bonding_curve_price = Column(Float, default=DEFAULT_BONDING_CURVE_PRICE)

    cover_image_url = Column(String(1024), nullable=True)

    # free-form document edited by the Story Bible
    story_bible = Column(JSON, default=dict)

    created_by = Column(String(64), index=True, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    characters = relationship("CharacterSeed", back_populates="project", cascade="all, delete-orphan")
    panels = relationship("MangaPanel", back_populates="project", cascade="all, delete-orphan")
    funding_transactions = relationship("FundingTransaction", back_populates="project", cascade="all, delete-orphan")
