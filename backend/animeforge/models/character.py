from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship

from animeforge.db.base import Base
from animeforge.models.provenance import audited


@audited
class CharacterSeed(Base):
    __tablename__ = "character_seeds"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)

    name = Column(String(255), nullable=False)
    # protagonist / antagonist / supporting / ... (not constrained)
    role = Column(String(64), nullable=False, default="supporting")

    personality = Column(JSON, default=list)   # list[str]
    abilities = Column(JSON, default=list)     # list[str]
    style_dna = Column(JSON, default=dict)

    appearance = Column(Text, nullable=True)
    backstory = Column(Text, nullable=True)
    reference_image_url = Column(String(1024), nullable=True)

    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    project = relationship("Project", back_populates="characters")
