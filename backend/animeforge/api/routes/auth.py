from fastapi import APIRouter, Depends, status

from animeforge import schemas
from animeforge.api.dependencies import get_auth_session
from animeforge.services.auth_session import AuthSession

router = APIRouter(prefix="/auth", tags=["auth"])


def _me(auth: AuthSession) -> schemas.Me:
    return schemas.Me(
        user_id=auth.user_id,
        email=auth.email,
        profile=schemas.Profile.model_validate(auth.profile),
        roles=auth.roles,
    )


@router.get("/me", response_model=schemas.Me)
def read_me(auth: AuthSession = Depends(get_auth_session)):
    return _me(auth)


@router.patch("/me", response_model=schemas.Me)
def update_me(profile_in: schemas.ProfileUpdate, auth: AuthSession = Depends(get_auth_session)):
    auth.update_profile(**profile_in.model_dump(exclude_unset=True))
    return _me(auth)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(auth: AuthSession = Depends(get_auth_session)):
    # tokens are stateless; the client drops its copy
    auth.sign_out()
