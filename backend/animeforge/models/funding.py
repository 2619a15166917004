from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float, JSON
from sqlalchemy.orm import relationship

from animeforge.db.base import Base


class FundingTransaction(Base):
    """Append-only ledger entry, one per funding action."""

    __tablename__ = "funding_transactions"

    id = Column(Integer, primary_key=True, index=True)

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)
    user_id = Column(String(64), index=True, nullable=True)

    amount = Column(Float, nullable=False)
    credits_received = Column(Integer, nullable=False)
    price_at_purchase = Column(Float, nullable=False)
    transaction_type = Column(String(32), nullable=False, default="fund")

    tx_metadata = Column("metadata", JSON, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow)

    project = relationship("Project", back_populates="funding_transactions")
