from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON, Boolean
from sqlalchemy.orm import relationship

from animeforge.db.base import Base
from animeforge.models.provenance import audited


@audited
class MangaPanel(Base):
    __tablename__ = "manga_panels"
    __prompt_fields__ = ("description", "prompt_data")

    id = Column(Integer, primary_key=True, index=True)

    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )

    # ordering key: (chapter, page, position); not unique
    chapter_number = Column(Integer, nullable=False, default=1)
    page_number = Column(Integer, nullable=False, default=1)
    panel_position = Column(Integer, nullable=False, default=0)

    description = Column(Text, nullable=True)
    dialogue = Column(Text, nullable=True)
    prompt_data = Column(JSON, default=dict)
    image_url = Column(String(1024), nullable=True)
    is_keyframe = Column(Boolean, nullable=False, default=False)

    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    project = relationship("Project", back_populates="panels")
