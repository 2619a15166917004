from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from animeforge import models, schemas
from animeforge.api.dependencies import get_auth_session, get_db
from animeforge.core.files import save_character_image
from animeforge.services.auth_session import AuthSession
from animeforge.services.character_vault import CharacterVault

router = APIRouter(prefix="/characters", tags=["characters"])


def _vault_for(character_id: int, db: Session, auth: AuthSession) -> CharacterVault:
    character = (
        db.query(models.CharacterSeed)
        .filter(models.CharacterSeed.id == character_id)
        .first()
    )
    if not character:
        raise HTTPException(status_code=404, detail="Character not found")

    vault = CharacterVault(db, auth, character.project_id)
    vault.select(character.id)
    return vault


@router.post("/", response_model=schemas.Character, status_code=status.HTTP_201_CREATED)
def create_character(
    character_in: schemas.CharacterCreate,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    fields = character_in.model_dump(exclude={"project_id"})
    with CharacterVault(db, auth, character_in.project_id) as vault:
        return vault.create(**fields)


@router.get("/project/{project_id}", response_model=List[schemas.Character])
def list_characters_for_project(
    project_id: int,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with CharacterVault(db, auth, project_id) as vault:
        return vault.characters


@router.patch("/{character_id}", response_model=schemas.Character)
def update_character(
    character_id: int,
    character_in: schemas.CharacterUpdate,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with _vault_for(character_id, db, auth) as vault:
        return vault.update(character_in.model_dump(exclude_unset=True))


@router.delete("/{character_id}", response_model=schemas.CharacterDeleted)
def delete_character(
    character_id: int,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with _vault_for(character_id, db, auth) as vault:
        next_selected = vault.delete()
        return schemas.CharacterDeleted(
            deleted_id=character_id,
            next_selected=schemas.Character.model_validate(next_selected) if next_selected else None,
        )


@router.post("/{character_id}/style-dna", response_model=schemas.Character)
def generate_style_dna(
    character_id: int,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with _vault_for(character_id, db, auth) as vault:
        return vault.generate_style_dna()


@router.post("/{character_id}/image", response_model=schemas.Character)
def upload_character_image(
    character_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with _vault_for(character_id, db, auth) as vault:
        path = save_character_image(character_id, file)
        return vault.set_reference_image(character_id, path)
