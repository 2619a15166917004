"""
Provenance Log viewer: the newest audit rows of a project, their summary,
and the JSON export handed out as ``provenance-<projectId>.json``.
"""

import json
from typing import List, Optional, Tuple

from animeforge import models
from animeforge.schemas.provenance import ProvenanceEntry, ProvenanceSummary
from animeforge.services.editor import ProjectEditor

LOG_LIMIT = 100


def export_filename(project_id: int) -> str:
    return f"provenance-{project_id}.json"


def serialize_entries(entries: List[ProvenanceEntry]) -> str:
    return json.dumps([e.model_dump(mode="json") for e in entries], indent=2)


def summarize(entries: List[ProvenanceEntry]) -> ProvenanceSummary:
    actions = [e.action for e in entries]
    return ProvenanceSummary(
        total=len(entries),
        inserts=actions.count(models.ProvenanceAction.INSERT.value),
        updates=actions.count(models.ProvenanceAction.UPDATE.value),
        deletes=actions.count(models.ProvenanceAction.DELETE.value),
        entity_types=sorted({e.entity_type for e in entries}),
    )


class ProvenanceLogViewer(ProjectEditor):

    def fetch(self, entity_type: Optional[str] = None, limit: int = LOG_LIMIT) -> List[ProvenanceEntry]:
        query = (
            self.db.query(models.ProvenanceLog)
            .filter(models.ProvenanceLog.project_id == self.project_id)
        )
        if entity_type:
            query = query.filter(models.ProvenanceLog.entity_type == entity_type)

        rows = (
            query.order_by(models.ProvenanceLog.created_at.desc(), models.ProvenanceLog.id.desc())
            .limit(min(limit, LOG_LIMIT))
            .all()
        )
        self.cache.load(rows)
        return [ProvenanceEntry.model_validate(row) for row in rows]

    def export(self, entity_type: Optional[str] = None) -> Tuple[str, str]:
        """(filename, JSON text) of exactly the rows ``fetch`` returns."""
        entries = self.fetch(entity_type)
        return export_filename(self.project_id), serialize_entries(entries)
