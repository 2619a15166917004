from sqlalchemy.orm import Session

from animeforge import models
from animeforge.core.errors import NotFoundError, PermissionDeniedError


def has_role(db: Session, user_id: str, role: models.AppRole) -> bool:
    return (
        db.query(models.UserRole)
        .filter(models.UserRole.user_id == user_id, models.UserRole.role == role)
        .first()
        is not None
    )


def is_project_owner(db: Session, project_id: int, user_id: str) -> bool:
    return (
        db.query(models.Project.id)
        .filter(models.Project.id == project_id, models.Project.created_by == user_id)
        .first()
        is not None
    )


def get_editable_project(db: Session, project_id: int, user_id: str) -> models.Project:
    """Load a project the user may edit: its owner, or an admin."""
    project = db.query(models.Project).filter(models.Project.id == project_id).first()
    if not project:
        raise NotFoundError("Project not found")
    if project.created_by != user_id and not has_role(db, user_id, models.AppRole.admin):
        raise PermissionDeniedError()
    return project
