"""
Launchpad funding on a bonding curve.

Every purchase buys ``floor(amount / price)`` credits at the current price
and moves the price up by 1%. The price doubles as a version token: the
project row is only updated if its price is still the one the credits were
quoted at, and the ledger row commits in the same transaction.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import List

from sqlalchemy import case, func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from animeforge import models
from animeforge.core.errors import (
    FundingConflictError,
    InvalidFundingAmountError,
    NotFoundError,
    PersistenceError,
)

logger = logging.getLogger(__name__)

PRICE_STEP = 1.01

LAUNCHPAD_STATUSES = (
    models.ProjectStatus.pilot,
    models.ProjectStatus.funding,
    models.ProjectStatus.funded,
)


@dataclass
class Quote:
    amount: float
    price: float
    credits: int
    next_price: float


def current_price(project: models.Project) -> float:
    return project.bonding_curve_price or models.DEFAULT_BONDING_CURVE_PRICE


def credits_for(amount: float, price: float) -> int:
    # decimal division so 0.3 / 0.1 buys 3 credits, not 2
    return math.floor(Decimal(str(amount)) / Decimal(str(price)))


def next_price(price: float) -> float:
    return price * PRICE_STEP


def percentage_of_goal(current: float, goal: float) -> float:
    # same rule as the SQL expression in fund_project
    if not goal or goal <= 0:
        return 0.0
    return (current or 0) * 100.0 / goal


def quote(amount: float, price: float) -> Quote:
    if amount is None or amount <= 0:
        raise InvalidFundingAmountError()
    if price <= 0:
        raise InvalidFundingAmountError("Project has no valid price")
    return Quote(
        amount=amount,
        price=price,
        credits=credits_for(amount, price),
        next_price=next_price(price),
    )


def list_launchpad_projects(db: Session) -> List[models.Project]:
    return (
        db.query(models.Project)
        .filter(models.Project.status.in_(LAUNCHPAD_STATUSES))
        .order_by(models.Project.funding_current.desc())
        .all()
    )


def get_fundable_project(db: Session, project_id: int) -> models.Project:
    """A project listed on the Launchpad; anything else is not found."""
    project = db.query(models.Project).filter(models.Project.id == project_id).first()
    if not project or project.status not in LAUNCHPAD_STATUSES:
        raise NotFoundError("Project not found")
    return project


def fund_project(db: Session, project_id: int, user_id: str, amount: float) -> models.FundingTransaction:
    """
    Buy credits in ``project_id`` for ``amount``.

    Raises:
        NotFoundError: unknown project, or one not open for funding
        InvalidFundingAmountError: amount <= 0
        FundingConflictError: another purchase moved the price first
        PersistenceError: the store rejected the write
    """
    project = get_fundable_project(db, project_id)

    stored_price = project.bonding_curve_price
    q = quote(amount, current_price(project))

    new_current = func.coalesce(models.Project.funding_current, 0) + amount
    price_matches = (
        models.Project.bonding_curve_price.is_(None)
        if stored_price is None
        else models.Project.bonding_curve_price == stored_price
    )

    stmt = (
        update(models.Project)
        .where(models.Project.id == project_id, price_matches)
        .values(
            funding_current=new_current,
            funding_percentage=case(
                (models.Project.funding_goal > 0, new_current * 100.0 / models.Project.funding_goal),
                else_=0.0,
            ),
            bonding_curve_price=q.next_price,
        )
        .execution_options(synchronize_session=False)
    )

    try:
        result = db.execute(stmt)
        if result.rowcount != 1:
            db.rollback()
            logger.warning("Funding conflict on project %s at price %s", project_id, q.price)
            raise FundingConflictError()

        tx = models.FundingTransaction(
            project_id=project_id,
            user_id=user_id,
            amount=amount,
            credits_received=q.credits,
            price_at_purchase=q.price,
            transaction_type="fund",
        )
        db.add(tx)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Funding failed for project %s", project_id)
        raise PersistenceError("Failed to fund project")

    db.refresh(tx)
    db.refresh(project)
    logger.info(
        "Project %s funded: %s for %s credits at %.4f/credit",
        project_id, amount, q.credits, q.price,
    )
    return tx
