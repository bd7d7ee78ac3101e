"""
Manifest writer - the CSV at the root of every credential export.

Polars-based implementation:
- write_csv(include_header=True, separator=',', quote_style='necessary', line_terminator='\n')
- All columns Utf8, in header order
- Rows in source order (no sorting)
- Assert header line equals the mode headers exactly
"""
import logging
from pathlib import Path
from typing import Iterable, List, Sequence

import polars as pl

from credential_export.core.exceptions import ManifestWriteError
from credential_export.export.projector import ProjectedRow

logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "manifest.csv"


class ManifestWriter:
    """
    Writes projected rows to <staging_dir>/manifest.csv.

    The file is created exclusively and closed before write_manifest returns,
    so archiving never sees a half-written manifest.
    """

    def __init__(self, staging_dir: Path):
        self.staging_dir = Path(staging_dir)
        self.path = self.staging_dir / MANIFEST_FILE_NAME

    def write_manifest(
        self, rows: Iterable[ProjectedRow], header: Sequence[str]
    ) -> Path:
        """
        Write the manifest.

        Args:
            rows: Projected (and key-sanitized) rows, in export order
            header: Column names in mode order

        Returns:
            Path to the manifest

        Raises:
            ManifestWriteError: If the manifest cannot be written
        """
        df = self._build_frame(list(rows), header)

        try:
            with open(self.path, "xb") as f:
                df.write_csv(
                    f,
                    include_header=True,
                    separator=",",
                    quote_style="necessary",
                    line_terminator="\n",
                )
        except OSError as e:
            logger.error(f"Failed to write manifest {self.path}: {e}")
            raise ManifestWriteError(f"Failed to write manifest {self.path}: {e}") from e

        self._verify_headers(header)
        logger.info(f"Wrote manifest with {len(df)} rows to {self.path}")
        return self.path

    def _build_frame(self, rows: List[ProjectedRow], header: Sequence[str]) -> pl.DataFrame:
        """Build a Utf8 frame with exactly the header columns, in order."""
        columns = []
        for name in header:
            values = [row.get(name, "") for row in rows]
            columns.append(pl.Series(name, values, dtype=pl.Utf8))
        return pl.DataFrame(columns)

    def _verify_headers(self, header: Sequence[str]) -> None:
        """Verify that the manifest header matches the mode headers exactly."""
        try:
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                header_line = f.readline().rstrip("\n")
        except OSError as e:
            raise ManifestWriteError(f"Failed to re-read manifest {self.path}: {e}") from e

        expected_headers = ",".join(header)

        if header_line != expected_headers:
            raise ManifestWriteError(
                f"Manifest headers mismatch.\n"
                f"Expected: {expected_headers}\n"
                f"Got: {header_line}"
            )
