"""
Export API endpoints for credential archives.
"""
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from credential_export.adapters.repositories_sqlite import SQLiteCredentialSource
from credential_export.core.database import get_db
from credential_export.core.exceptions import ExportError, InvalidModeError
from credential_export.schemas.export import ExportRequest, ExportResponse
from credential_export.services.export_service import CredentialExporter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/workspaces/{workspace_id}/credentials/export")
def export_credentials(
    workspace_id: int,
    request: ExportRequest,
    db: Session = Depends(get_db)
):
    """
    Export a workspace's credentials as a ZIP file.

    ZIP contents:
    - manifest.csv - one row per credential (login mode adds host/service columns)
    - keys/<username>-<private_id> - SSH private keys referenced from manifest.csv
    """
    source = SQLiteCredentialSource(db)

    try:
        exporter = CredentialExporter(
            source,
            workspace_id=workspace_id,
            mode=request.mode,
            whitelist_ids=request.whitelist_ids,
        )
    except InvalidModeError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        return _export_response(exporter, workspace_id, source)
    finally:
        # The archive is sent in the response body; nothing stays on disk
        exporter.discard()


def _export_response(exporter: CredentialExporter, workspace_id: int, source: SQLiteCredentialSource) -> Response:
    try:
        if source.get_workspace(workspace_id) is None:
            raise HTTPException(status_code=404, detail="Workspace not found")

        if not exporter.data():
            raise HTTPException(status_code=404, detail="No credentials to export")

        result = exporter.run()
    except ExportError as e:
        logger.error(f"Export failed for workspace {workspace_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Export failed: {str(e)}")

    summary = ExportResponse(
        workspace_id=workspace_id,
        mode=result.mode.value,
        archive_path=result.archive_path,
        rows_exported=result.rows_exported,
        keys_exported=result.keys_exported,
    )
    archive = Path(summary.archive_path)

    return Response(
        content=archive.read_bytes(),
        media_type="application/zip",
        headers={
            "Content-Disposition": f"attachment; filename={archive.name}",
            "X-Export-Rows": str(summary.rows_exported),
            "X-Export-Keys": str(summary.keys_exported),
        }
    )
