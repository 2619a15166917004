from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON

from animeforge.db.base import Base
from animeforge.models.provenance import audited


@audited
class DirectorChoice(Base):
    """One human selection among AI variations. Written, never read back by the studio."""

    __tablename__ = "director_choices"
    __prompt_fields__ = ("variations",)

    id = Column(Integer, primary_key=True, index=True)

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)
    panel_id = Column(Integer, ForeignKey("manga_panels.id", ondelete="SET NULL"), nullable=True)

    choice_type = Column(String(64), nullable=False, default="panel_variation")
    variations = Column(JSON, default=list)
    selected_index = Column(Integer, nullable=True)
    selected_by = Column(String(64), nullable=True)
    selected_at = Column(DateTime, nullable=True)

    # "metadata" is reserved on declarative classes
    choice_metadata = Column("metadata", JSON, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow)
