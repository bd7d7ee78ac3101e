"""
Repository interfaces for credential data access.

The export pipeline never queries the store directly; it only consumes
what a CredentialSource hands back.
"""
from abc import ABC, abstractmethod
from typing import Any, Sequence

from credential_export.export.modes import ExportMode


class CredentialSource(ABC):
    """
    Source of credential records for one workspace.

    Implementations return records in a stable order (the order they
    appear in the manifest). Failures must be raised as RecordSourceError.
    """

    @abstractmethod
    def cores(self, workspace_id: int) -> Sequence[Any]:
        """
        List credential cores in a workspace.

        Each record exposes id, public.username, private.id, private.type,
        private.data, realm.key and realm.value. Any component may be None.

        Args:
            workspace_id: ID of the workspace

        Returns:
            Ordered sequence of core records
        """
        pass

    @abstractmethod
    def logins(self, workspace_id: int) -> Sequence[Any]:
        """
        List logins in a workspace, with their host and service attached.

        Each record exposes id, core (as returned by cores()) and
        service.port, service.name, service.proto, service.host.address.

        Args:
            workspace_id: ID of the workspace

        Returns:
            Ordered sequence of login records
        """
        pass

    def fetch(self, mode: ExportMode, workspace_id: int) -> Sequence[Any]:
        """Return the records exported in the given mode."""
        if mode is ExportMode.LOGIN:
            return self.logins(workspace_id)
        return self.cores(workspace_id)
