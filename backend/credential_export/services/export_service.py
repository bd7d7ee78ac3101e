"""
Credential export service - orchestrates the two-phase export pipeline.

Pipeline:
1. Select records for the mode from the CredentialSource (once)
2. Filter by whitelist IDs, if any
3. Phase 1 - render manifest and keys:
   a. Project each record into a row (mode-specific)
   b. Move SSH private keys into keys/<username>-<private_id>
   c. Write manifest.csv (header + rows, source order)
4. Phase 2 - render ZIP of the staging directory
5. Return: archive path (sibling of the staging directory)

Staging directory is left in place unless cleanup is requested.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Collection, List, Optional, Tuple, Union

from credential_export.core.config import settings
from credential_export.core.exceptions import ExportError, RecordSourceError
from credential_export.export.archive import ArchiveAssembler
from credential_export.export.keys import KeyMaterialExtractor
from credential_export.export.manifest import ManifestWriter
from credential_export.export.modes import HEADERS, ExportMode, resolve_mode
from credential_export.export.projector import PROJECTORS, ProjectedRow
from credential_export.export.staging import Clock, StagingArea
from credential_export.ports.repositories import CredentialSource

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """Result of a full export run."""

    workspace_id: Any
    mode: ExportMode
    archive_path: str
    staging_path: str
    rows_exported: int
    keys_exported: int
    staging_removed: bool = False


class CredentialExporter:
    """
    Exports credential cores, or logins with their host and service, to a ZIP.

    Example:
        exporter = CredentialExporter(source, workspace_id=1, mode="core")
        archive_path = exporter.export()
    """

    def __init__(
        self,
        source: CredentialSource,
        workspace_id: Any,
        mode: Optional[Union[ExportMode, str]] = None,
        whitelist_ids: Optional[Collection[Any]] = None,
        base_dir: Optional[Union[str, Path]] = None,
        clock: Optional[Clock] = None,
        cleanup_staging: Optional[bool] = None,
    ):
        """
        Initialize the exporter.

        Args:
            source: Record source for the workspace
            workspace_id: Scope of the export
            mode: ExportMode or "core"/"login"; defaults to the configured mode
            whitelist_ids: Only export records with these IDs (empty = all)
            base_dir: Parent of the staging directory (fresh temp dir if None)
            clock: Returns epoch seconds for the staging name (time.time if None)
            cleanup_staging: Remove the staging directory after archiving

        Raises:
            InvalidModeError: If mode is not a recognized export mode
        """
        if mode is None or mode == "":
            mode = settings.DEFAULT_EXPORT_MODE
        self.mode = resolve_mode(mode)
        self.source = source
        self.workspace_id = workspace_id
        self.whitelist_ids = frozenset(whitelist_ids or ())
        self.cleanup_staging = (
            settings.CLEANUP_STAGING if cleanup_staging is None else cleanup_staging
        )

        self._header = HEADERS[self.mode]
        self._line_for: Callable[[Any], ProjectedRow] = PROJECTORS[self.mode]

        self.staging = StagingArea(base_dir=base_dir, clock=clock)
        self._export_data: Optional[Tuple[Any, ...]] = None

    # - - - Record selection - - -

    def load(self) -> Tuple[Any, ...]:
        """
        Fetch the records for this mode from the source.

        Called once; later calls return the same records.

        Raises:
            RecordSourceError: If the source fails
        """
        if self._export_data is None:
            try:
                records = self.source.fetch(self.mode, self.workspace_id)
            except ExportError:
                raise
            except Exception as e:
                raise RecordSourceError(
                    f"Failed to load {self.mode.value} records for workspace {self.workspace_id}: {e}"
                ) from e
            self._export_data = tuple(records)
            logger.info(
                f"Loaded {len(self._export_data)} {self.mode.value} records "
                f"for workspace {self.workspace_id}"
            )
        return self._export_data

    def export_data(self) -> Tuple[Any, ...]:
        """All records for this mode, before whitelist filtering."""
        return self.load()

    def data(self) -> List[Any]:
        """The records that will be exported, in source order."""
        records = self.load()
        if not self.whitelist_ids:
            return list(records)
        return [datum for datum in records if getattr(datum, "id", None) in self.whitelist_ids]

    def header_line(self) -> Tuple[str, ...]:
        """Manifest header for this mode."""
        return self._header

    # - - - Paths - - -

    @property
    def output_final_directory_path(self) -> Path:
        return self.staging.directory

    @property
    def output_zipfile_path(self) -> Path:
        return self.staging.archive_path

    # - - - Pipeline - - -

    def render_manifest_output_and_keys(self) -> Tuple[int, int]:
        """
        Phase 1: project rows, extract keys, write manifest.csv.

        Nothing is written when there are no records to export.

        Returns:
            Tuple of (rows_written, key_files_written)
        """
        records = self.data()
        staging_dir = self.staging.prepare()

        if not records:
            logger.warning(
                f"No {self.mode.value} records to export for workspace {self.workspace_id}"
            )
            return 0, 0

        extractor = KeyMaterialExtractor(staging_dir)
        rows: List[ProjectedRow] = []
        for datum in records:
            line = self._line_for(datum)
            rows.append(extractor.extract(datum, line))

        ManifestWriter(staging_dir).write_manifest(rows, self._header)
        return len(rows), len(extractor.written)

    def render_zip(self) -> Path:
        """Phase 2: ZIP the staging directory next to it."""
        return ArchiveAssembler().assemble(self.staging.directory, self.staging.archive_path)

    def run(self) -> ExportResult:
        """
        Perform the export, creating the manifest, key files and ZIP.

        Returns:
            ExportResult with archive path and counts

        Raises:
            ExportError: Any pipeline failure (see core.exceptions)
        """
        logger.info(
            f"Starting {self.mode.value} export for workspace {self.workspace_id}"
            + (f" ({len(self.whitelist_ids)} whitelisted IDs)" if self.whitelist_ids else "")
        )

        rows, keys = self.render_manifest_output_and_keys()
        archive_path = self.render_zip()

        removed = self.cleanup() if self.cleanup_staging else False

        logger.info(f"Exported {rows} rows and {keys} key files to {archive_path}")
        return ExportResult(
            workspace_id=self.workspace_id,
            mode=self.mode,
            archive_path=str(archive_path),
            staging_path=str(self.staging.directory),
            rows_exported=rows,
            keys_exported=keys,
            staging_removed=removed,
        )

    def export(self) -> str:
        """Perform the export and return the archive path."""
        return self.run().archive_path

    def cleanup(self) -> bool:
        """Remove the staging directory; the archive is kept."""
        return self.staging.cleanup()

    def discard(self) -> None:
        """Remove the staging directory and the archive."""
        self.staging.discard()
