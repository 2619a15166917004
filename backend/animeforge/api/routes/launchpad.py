from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from animeforge import schemas
from animeforge.api.dependencies import get_auth_session, get_db
from animeforge.services import funding
from animeforge.services.auth_session import AuthSession

router = APIRouter(prefix="/launchpad", tags=["launchpad"])


@router.get("/", response_model=List[schemas.Project])
def list_launchpad(db: Session = Depends(get_db)):
    return funding.list_launchpad_projects(db)


@router.get("/{project_id}/quote", response_model=schemas.FundingQuote)
def quote_funding(
    project_id: int,
    amount: float = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    project = funding.get_fundable_project(db, project_id)
    q = funding.quote(amount, funding.current_price(project))
    return schemas.FundingQuote(
        project_id=project.id,
        amount=q.amount,
        price=q.price,
        credits=q.credits,
        next_price=q.next_price,
    )


@router.post("/{project_id}/fund", response_model=schemas.FundingReceipt)
def fund(
    project_id: int,
    fund_in: schemas.FundRequest,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    tx = funding.fund_project(db, project_id, auth.user_id, fund_in.amount)
    project = tx.project
    return schemas.FundingReceipt(
        transaction_id=tx.id,
        project_id=project.id,
        amount=tx.amount,
        credits_received=tx.credits_received,
        price_at_purchase=tx.price_at_purchase,
        new_price=project.bonding_curve_price,
        funding_current=project.funding_current,
        funding_percentage=project.funding_percentage,
        created_at=tx.created_at,
    )
