from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from animeforge import schemas
from animeforge.api.dependencies import get_auth_session, get_db
from animeforge.services.auth_session import AuthSession
from animeforge.services.character_vault import CharacterVault
from animeforge.services.director_studio import DirectorStudio

router = APIRouter(prefix="/studio", tags=["studio"])


@router.get("/{project_id}", response_model=schemas.StudioState)
def open_studio(
    project_id: int,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    """Everything the studio screen needs on first load."""
    with CharacterVault(db, auth, project_id) as vault, DirectorStudio(db, auth, project_id) as studio:
        return schemas.StudioState(
            project=schemas.Project.model_validate(vault.project),
            characters=[schemas.Character.model_validate(c) for c in vault.characters],
            panels=[schemas.Panel.model_validate(p) for p in studio.panels],
            max_page=studio.max_page(),
        )
