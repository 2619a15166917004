from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from animeforge import models, schemas
from animeforge.api.dependencies import get_auth_session, get_db, get_variation_service
from animeforge.services.auth_session import AuthSession
from animeforge.services.director_studio import DirectorStudio
from animeforge.services.variations import VariationService

router = APIRouter(prefix="/panels", tags=["panels"])


def _studio_for(
    panel_id: int,
    db: Session,
    auth: AuthSession,
    variation_service: Optional[VariationService] = None,
) -> DirectorStudio:
    panel = db.query(models.MangaPanel).filter(models.MangaPanel.id == panel_id).first()
    if not panel:
        raise HTTPException(status_code=404, detail="Panel not found")
    return DirectorStudio(db, auth, panel.project_id, variation_service=variation_service)


@router.get("/project/{project_id}", response_model=List[schemas.Panel])
def list_panels_for_project(
    project_id: int,
    chapter: Optional[int] = None,
    page: Optional[int] = None,
    keyframes_only: bool = False,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with DirectorStudio(db, auth, project_id) as studio:
        if keyframes_only:
            return studio.keyframes()
        if chapter is not None and page is not None:
            return studio.page_panels(chapter, page)
        return studio.panels


@router.post("/", response_model=schemas.Panel, status_code=status.HTTP_201_CREATED)
def create_panel(
    panel_in: schemas.PanelCreate,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with DirectorStudio(db, auth, panel_in.project_id) as studio:
        return studio.add_panel(panel_in.chapter_number, panel_in.page_number)


@router.patch("/{panel_id}", response_model=schemas.Panel)
def update_panel(
    panel_id: int,
    panel_in: schemas.PanelUpdate,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with _studio_for(panel_id, db, auth) as studio:
        return studio.update_panel(panel_id, panel_in.model_dump(exclude_unset=True))


@router.delete("/{panel_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_panel(
    panel_id: int,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with _studio_for(panel_id, db, auth) as studio:
        studio.delete_panel(panel_id)


@router.post("/{panel_id}/keyframe", response_model=schemas.Panel)
def toggle_keyframe(
    panel_id: int,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with _studio_for(panel_id, db, auth) as studio:
        return studio.toggle_keyframe(panel_id)


@router.post("/{panel_id}/variations", response_model=schemas.VariationSet)
def generate_panel_variations(
    panel_id: int,
    style_preferences: Optional[List[str]] = Body(default=None, embed=True),
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
    variation_service: VariationService = Depends(get_variation_service),
):
    """Director's Choice: four variations, never persisted until one is selected."""
    with _studio_for(panel_id, db, auth, variation_service) as studio:
        result = studio.generate_variations(panel_id, style_preferences)
        return schemas.VariationSet(
            panel_id=panel_id,
            variations=result.variations,
            notice=result.notice,
            message=result.message,
        )


@router.post("/{panel_id}/director-choice", response_model=schemas.Panel)
def select_director_choice(
    panel_id: int,
    choice_in: schemas.DirectorChoiceSelect,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with _studio_for(panel_id, db, auth) as studio:
        return studio.select_variation(panel_id, choice_in.variations, choice_in.selected_index)
