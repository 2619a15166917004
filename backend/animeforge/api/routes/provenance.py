from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from animeforge import schemas
from animeforge.api.dependencies import get_auth_session, get_db
from animeforge.services.auth_session import AuthSession
from animeforge.services.provenance import LOG_LIMIT, ProvenanceLogViewer, summarize

router = APIRouter(prefix="/provenance", tags=["provenance"])


@router.get("/project/{project_id}", response_model=List[schemas.ProvenanceEntry])
def list_provenance(
    project_id: int,
    entity_type: Optional[str] = None,
    limit: int = Query(LOG_LIMIT, ge=1, le=LOG_LIMIT),
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with ProvenanceLogViewer(db, auth, project_id) as viewer:
        return viewer.fetch(entity_type, limit)


@router.get("/project/{project_id}/summary", response_model=schemas.ProvenanceSummary)
def provenance_summary(
    project_id: int,
    entity_type: Optional[str] = None,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with ProvenanceLogViewer(db, auth, project_id) as viewer:
        return summarize(viewer.fetch(entity_type))


@router.get("/project/{project_id}/export")
def export_provenance(
    project_id: int,
    entity_type: Optional[str] = None,
    db: Session = Depends(get_db),
    auth: AuthSession = Depends(get_auth_session),
):
    with ProvenanceLogViewer(db, auth, project_id) as viewer:
        filename, content = viewer.export(entity_type)
    return Response(
        content=content,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
