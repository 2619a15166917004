from sqlalchemy.orm import Session

from animeforge.db.session import commit_or_raise
from animeforge.services.access import get_editable_project
from animeforge.services.auth_session import AuthEvent, AuthSession
from animeforge.services.cache import RowCache


class ProjectEditor:
    """
    Base for the studio sub-editors: one project, one table.

    The editor checks edit access on construction, keeps a RowCache of the
    rows it shows, and drops that cache when the auth session signs out or
    switches user.
    """

    def __init__(self, db: Session, auth: AuthSession, project_id: int):
        self.db = db
        self.auth = auth
        self.project = get_editable_project(db, project_id, auth.require_user())
        self.cache = RowCache()
        self._unsubscribe = auth.subscribe(self._on_auth_event)

    @property
    def project_id(self) -> int:
        return self.project.id

    def _on_auth_event(self, event: AuthEvent, session: AuthSession) -> None:
        if event in (AuthEvent.SIGNED_OUT, AuthEvent.SIGNED_IN):
            self.cache.clear()

    def close(self) -> None:
        self._unsubscribe()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _commit(self, failure_message: str) -> None:
        commit_or_raise(self.db, failure_message)
