"""
Pydantic schemas for export API.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class ExportRequest(BaseModel):
    """Body of the credential export endpoint."""

    mode: Optional[str] = Field(default=None, description="'core' or 'login' (default: login)")
    whitelist_ids: List[int] = Field(default_factory=list)


class ExportResponse(BaseModel):
    """Summary of a finished export (sent as response headers with the ZIP)."""

    workspace_id: int
    mode: str
    archive_path: str
    rows_exported: int
    keys_exported: int

    class Config:
        from_attributes = True
