"""
SQLAlchemy implementation of the CredentialSource port.

Lean stack implementation using SQLAlchemy + SQLite.
Easy migration path to Postgres (same SQLAlchemy API).
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from credential_export.core.exceptions import RecordSourceError
from credential_export.models import Core, Login, Service, Workspace
from credential_export.ports.repositories import CredentialSource

logger = logging.getLogger(__name__)


class SQLiteCredentialSource(CredentialSource):
    """SQLAlchemy implementation of CredentialSource."""

    def __init__(self, db: Session):
        self.db = db

    def get_workspace(self, workspace_id: int) -> Optional[Workspace]:
        """Get a workspace by ID, or None if it does not exist."""
        try:
            return self.db.query(Workspace).filter(Workspace.id == workspace_id).first()
        except SQLAlchemyError as e:
            raise RecordSourceError(f"Failed to load workspace {workspace_id}: {e}") from e

    def cores(self, workspace_id: int) -> List[Core]:
        """List cores in a workspace with public, private and realm loaded."""
        try:
            return (
                self.db.query(Core)
                .options(
                    joinedload(Core.public),
                    joinedload(Core.private),
                    joinedload(Core.realm),
                )
                .filter(Core.workspace_id == workspace_id)
                .order_by(Core.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Core query failed for workspace {workspace_id}: {e}")
            raise RecordSourceError(
                f"Failed to load credential cores for workspace {workspace_id}: {e}"
            ) from e

    def logins(self, workspace_id: int) -> List[Login]:
        """List logins in a workspace including their core, service and host."""
        try:
            return (
                self.db.query(Login)
                .join(Login.core)
                .options(
                    joinedload(Login.core).joinedload(Core.public),
                    joinedload(Login.core).joinedload(Core.private),
                    joinedload(Login.core).joinedload(Core.realm),
                    joinedload(Login.service).joinedload(Service.host),
                )
                .filter(Core.workspace_id == workspace_id)
                .order_by(Login.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Login query failed for workspace {workspace_id}: {e}")
            raise RecordSourceError(
                f"Failed to load logins for workspace {workspace_id}: {e}"
            ) from e
