from typing import Generator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from animeforge.core.errors import AuthenticationError
from animeforge.db.session import SessionLocal
from animeforge.services.auth_session import AuthSession
from animeforge.services.variations import VariationService
from animeforge.services.story_drafter import StoryDrafter

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_auth_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Generator[AuthSession, None, None]:
    """Signed-in AuthSession for this request; 401 without a valid bearer token."""
    if credentials is None:
        raise _unauthorized("Not authenticated")

    auth = AuthSession(db)
    try:
        auth.sign_in(credentials.credentials)
    except AuthenticationError as e:
        raise _unauthorized(e.message)

    try:
        yield auth
    finally:
        auth.sign_out()


def get_variation_service() -> VariationService:
    return VariationService()


def get_story_drafter() -> StoryDrafter:
    return StoryDrafter()
