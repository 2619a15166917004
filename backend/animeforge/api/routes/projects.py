from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from animeforge import models, schemas
from animeforge.api.dependencies import get_auth_session, get_db
from animeforge.db.session import commit_or_raise
from animeforge.services import funding
from animeforge.services.access import get_editable_project
from animeforge.services.auth_session import AuthSession
from animeforge.services.story_bible import StoryBibleEditor, suggest_elements

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: schemas.ProjectCreate,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    project = models.Project(
        name=project_in.name,
        description=project_in.description,
        genre=project_in.genre,
        created_by=auth.user_id,
    )
    db.add(project)
    commit_or_raise(db, "Failed to create project")
    db.refresh(project)
    return project


@router.get("/", response_model=List[schemas.Project])
def list_my_projects(
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    return (
        db.query(models.Project)
        .filter(models.Project.created_by == auth.user_id)
        .order_by(models.Project.updated_at.desc())
        .all()
    )


@router.get("/{project_id}", response_model=schemas.Project)
def get_project(
    project_id: int,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    project = db.query(models.Project).filter(models.Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.patch("/{project_id}", response_model=schemas.Project)
def update_project(
    project_id: int,
    project_in: schemas.ProjectUpdate,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    project = get_editable_project(db, project_id, auth.user_id)

    data = project_in.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(project, field, value)
    if "funding_goal" in data:
        project.funding_percentage = funding.percentage_of_goal(project.funding_current, project.funding_goal)

    db.add(project)
    commit_or_raise(db, "Failed to update project")
    db.refresh(project)
    return project


@router.get(
    "/{project_id}/story-bible",
    response_model=schemas.StoryBible,
    response_model_exclude_none=True,
)
def get_story_bible(
    project_id: int,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with StoryBibleEditor(db, auth, project_id) as editor:
        return editor.load()


@router.put("/{project_id}/story-bible", response_model=schemas.Project)
def save_story_bible(
    project_id: int,
    story_bible: schemas.StoryBible,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with StoryBibleEditor(db, auth, project_id) as editor:
        return editor.save(story_bible)


@router.post(
    "/{project_id}/story-bible/suggest",
    response_model=schemas.StoryBible,
    response_model_exclude_none=True,
)
def suggest_story_bible(
    project_id: int,
    story_bible: schemas.StoryBible,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    # access check only; suggestions are not saved
    get_editable_project(db, project_id, auth.user_id)
    return suggest_elements(story_bible)
