from datetime import datetime
from pydantic import BaseModel, Field


class FundRequest(BaseModel):
    amount: float = Field(..., gt=0)


class FundingQuote(BaseModel):
    project_id: int
    amount: float
    price: float
    credits: int
    next_price: float


class FundingReceipt(BaseModel):
    transaction_id: int
    project_id: int
    amount: float
    credits_received: int
    price_at_purchase: float
    new_price: float
    funding_current: float
    funding_percentage: float
    created_at: datetime
