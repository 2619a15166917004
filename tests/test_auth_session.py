from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from animeforge import models
from animeforge.core.errors import AuthenticationError, PersistenceError
from animeforge.core.security import decode_access_token, display_name_from_claims
from animeforge.services.access import has_role, is_project_owner
from animeforge.services.auth_session import AuthEvent, AuthSession


def test_decode_valid_token(token_factory):
    claims = decode_access_token(token_factory("user-9"))
    assert claims["sub"] == "user-9"


def test_expired_token_is_rejected(token_factory):
    with pytest.raises(AuthenticationError) as excinfo:
        decode_access_token(token_factory(expires_in=-60))
    assert "expired" in excinfo.value.message


def test_wrong_audience_is_rejected(token_factory):
    with pytest.raises(AuthenticationError):
        decode_access_token(token_factory(aud="anon"))


def test_garbage_token_is_rejected():
    with pytest.raises(AuthenticationError):
        decode_access_token("not-a-jwt")


def test_unverified_mode_still_needs_subject(token_factory):
    token = token_factory(sub="")
    with pytest.raises(AuthenticationError):
        decode_access_token(token, secret="")


def test_display_name_fallbacks():
    assert display_name_from_claims({"user_metadata": {"full_name": "Ren Aoki"}}) == "Ren Aoki"
    assert display_name_from_claims({"email": "mei@example.com"}) == "mei"
    assert display_name_from_claims({}) is None


def test_first_sign_in_creates_profile_and_creator_role(db, token_factory):
    auth = AuthSession(db).sign_in(token_factory("new-user", email="new@example.com"))

    assert auth.is_authenticated
    assert auth.profile.display_name == "Hikari"
    assert auth.roles == [models.AppRole.creator]
    assert has_role(db, "new-user", models.AppRole.creator)
    assert not has_role(db, "new-user", models.AppRole.admin)


def test_events_and_unsubscribe(db, token_factory):
    auth = AuthSession(db)
    events = []
    unsubscribe = auth.subscribe(lambda event, session: events.append(event))

    auth.sign_in(token_factory("user-1"))
    auth.sign_in(token_factory("user-1"))
    auth.update_profile(bio="Writes shonen at night")
    auth.sign_out()
    unsubscribe()
    auth.sign_in(token_factory("user-1"))

    assert events == [
        AuthEvent.SIGNED_IN,
        AuthEvent.TOKEN_REFRESHED,
        AuthEvent.USER_UPDATED,
        AuthEvent.SIGNED_OUT,
    ]


def test_sign_out_clears_identity(db, token_factory):
    auth = AuthSession(db).sign_in(token_factory("user-1"))
    auth.sign_out()

    assert not auth.is_authenticated
    assert auth.profile is None
    assert "user_id" not in db.info
    with pytest.raises(AuthenticationError):
        auth.require_user()


def test_is_project_owner(db, auth, project):
    assert is_project_owner(db, project.id, "user-1")
    assert not is_project_owner(db, project.id, "user-2")
    assert not is_project_owner(db, 999, "user-1")


def test_failed_profile_update_keeps_stored_profile(db, auth):
    with patch.object(db, "commit", side_effect=SQLAlchemyError("disk full")):
        with pytest.raises(PersistenceError) as excinfo:
            auth.update_profile(bio="Lost words")

    assert excinfo.value.message == "Failed to update profile"
    assert db.query(models.Profile).filter_by(id="user-1").one().bio is None
