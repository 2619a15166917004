"""
Auth session context.

An AuthSession holds the signed-in identity, its profile and roles for one
client session. It is created per request and handed explicitly to the
studio editors; editors subscribe to its events (e.g. drop cached rows on
sign-out) and unsubscribe when they close.
"""

import enum
import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from animeforge import models
from animeforge.core.errors import AuthenticationError
from animeforge.core.security import decode_access_token, display_name_from_claims
from animeforge.db.session import commit_or_raise

logger = logging.getLogger(__name__)


class AuthEvent(str, enum.Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"


Listener = Callable[[AuthEvent, "AuthSession"], None]


class AuthSession:

    def __init__(self, db: Session):
        self.db = db
        self.user_id: Optional[str] = None
        self.claims: dict = {}
        self.profile: Optional[models.Profile] = None
        self.roles: List[models.AppRole] = []
        self._listeners: List[Listener] = []

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def email(self) -> Optional[str]:
        return self.claims.get("email")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns the matching unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: AuthEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self)

    def sign_in(self, token: str) -> "AuthSession":
        claims = decode_access_token(token)
        user_id = claims["sub"]
        refreshed = self.user_id == user_id

        self.claims = claims
        self.user_id = user_id
        self.profile = self._load_or_create_profile()
        self.roles = self._load_roles()
        # audit rows written through this session are attributed to the user
        self.db.info["user_id"] = user_id

        self._emit(AuthEvent.TOKEN_REFRESHED if refreshed else AuthEvent.SIGNED_IN)
        return self

    def sign_out(self) -> None:
        if not self.is_authenticated:
            return
        logger.info("User %s signed out", self.user_id)
        self.user_id = None
        self.claims = {}
        self.profile = None
        self.roles = []
        self.db.info.pop("user_id", None)
        self._emit(AuthEvent.SIGNED_OUT)

    def require_user(self) -> str:
        if not self.is_authenticated:
            raise AuthenticationError("Sign in required")
        return self.user_id

    def update_profile(self, **fields) -> models.Profile:
        self.require_user()
        for field, value in fields.items():
            setattr(self.profile, field, value)
        self.db.add(self.profile)
        commit_or_raise(self.db, "Failed to update profile")
        self.db.refresh(self.profile)
        self._emit(AuthEvent.USER_UPDATED)
        return self.profile

    def _load_or_create_profile(self) -> models.Profile:
        profile = self.db.query(models.Profile).filter(models.Profile.id == self.user_id).first()
        if profile:
            return profile

        # first sign-in: profile plus the default creator role
        profile = models.Profile(
            id=self.user_id,
            display_name=display_name_from_claims(self.claims),
        )
        self.db.add(profile)
        self.db.add(models.UserRole(user_id=self.user_id, role=models.AppRole.creator))
        commit_or_raise(self.db, "Failed to create profile")
        self.db.refresh(profile)
        logger.info("Created profile for new user %s", self.user_id)
        return profile

    def _load_roles(self) -> List[models.AppRole]:
        rows = self.db.query(models.UserRole).filter(models.UserRole.user_id == self.user_id).all()
        return [row.role for row in rows]
