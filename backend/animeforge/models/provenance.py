"""
Append-only audit trail of studio edits.

Audited models get INSERT/UPDATE/DELETE rows written inside the same flush
as the change itself, the way a table trigger would. Log rows refuse ORM
updates and deletes.
"""

import enum
import hashlib
import json
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import Column, DateTime, Integer, JSON, String, event, inspect
from sqlalchemy.orm import object_session

from animeforge.core.errors import ProvenanceImmutableError
from animeforge.db.base import Base


class ProvenanceAction(str, enum.Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ProvenanceLog(Base):
    __tablename__ = "provenance_logs"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, index=True, nullable=True)

    entity_type = Column(String(64), nullable=False, index=True)
    entity_id = Column(String(64), nullable=False)
    action = Column(String(16), nullable=False)
    user_id = Column(String(64), nullable=True)

    details = Column(JSON, default=dict)
    prompt_hash = Column(String(64), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)


# Bookkeeping columns are not edits
_IGNORED_FIELDS = {"created_at", "updated_at"}


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    return value


def _snapshot(target) -> Dict[str, Any]:
    mapper = inspect(target).mapper
    return {
        attr.key: _jsonable(getattr(target, attr.key))
        for attr in mapper.column_attrs
        if attr.key not in _IGNORED_FIELDS
    }


def _changes(target) -> Dict[str, Any]:
    state = inspect(target)
    changes = {}
    for attr in state.mapper.column_attrs:
        if attr.key in _IGNORED_FIELDS:
            continue
        history = state.attrs[attr.key].history
        if not history.has_changes():
            continue
        old = history.deleted[0] if history.deleted else None
        new = history.added[0] if history.added else None
        if old == new:
            continue
        changes[attr.key] = {"old": _jsonable(old), "new": _jsonable(new)}
    return changes


def prompt_hash_for(target) -> Optional[str]:
    """SHA-256 of the prompt-bearing fields, or None when they are all empty."""
    fields = getattr(target, "__prompt_fields__", ())
    payload = {name: getattr(target, name, None) for name in fields}
    if not any(payload.values()):
        return None
    encoded = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def _project_id_for(target) -> Optional[int]:
    if target.__tablename__ == "projects":
        return target.id
    return getattr(target, "project_id", None)


def _acting_user(target) -> Optional[str]:
    session = object_session(target)
    if session is None:
        return None
    return session.info.get("user_id")


def write_entry(
    connection,
    *,
    project_id: Optional[int],
    entity_type: str,
    entity_id: Any,
    action: ProvenanceAction,
    user_id: Optional[str],
    details: Dict[str, Any],
    prompt_hash: Optional[str] = None,
) -> None:
    connection.execute(
        ProvenanceLog.__table__.insert().values(
            project_id=project_id,
            entity_type=entity_type,
            entity_id=str(entity_id),
            action=action.value,
            user_id=user_id,
            details=details,
            prompt_hash=prompt_hash,
            created_at=datetime.utcnow(),
        )
    )


def _log(connection, target, action: ProvenanceAction, details: Dict[str, Any]) -> None:
    write_entry(
        connection,
        project_id=_project_id_for(target),
        entity_type=target.__tablename__,
        entity_id=target.id,
        action=action,
        user_id=_acting_user(target),
        details=details,
        prompt_hash=prompt_hash_for(target),
    )


def _after_insert(mapper, connection, target):
    _log(connection, target, ProvenanceAction.INSERT, _snapshot(target))


def _after_update(mapper, connection, target):
    changes = _changes(target)
    if changes:
        _log(connection, target, ProvenanceAction.UPDATE, changes)


def _before_delete(mapper, connection, target):
    # Snapshot while the row still exists; expired attributes reload from it
    _log(connection, target, ProvenanceAction.DELETE, _snapshot(target))


def audited(cls):
    """Class decorator: log every insert, update and delete of ``cls``."""
    event.listen(cls, "after_insert", _after_insert)
    event.listen(cls, "after_update", _after_update)
    event.listen(cls, "before_delete", _before_delete)
    return cls


def record_change(session, target, changes: Dict[str, Any]) -> None:
    """
    Log an UPDATE that bypassed the ORM unit of work (e.g. an atomic
    UPDATE statement), so the audit trail still sees it.
    """
    _log(session.connection(), target, ProvenanceAction.UPDATE, changes)


@event.listens_for(ProvenanceLog, "before_update")
def _reject_update(mapper, connection, target):
    raise ProvenanceImmutableError()


@event.listens_for(ProvenanceLog, "before_delete")
def _reject_delete(mapper, connection, target):
    raise ProvenanceImmutableError()
