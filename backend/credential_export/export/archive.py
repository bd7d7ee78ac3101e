"""
Archive assembly - zips a staging directory into the final export.

- Every regular file under the staging directory, recursively
- Entry names relative to the staging directory (POSIX separators)
- Lexicographic entry order and fixed timestamps, so identical staging
  contents give byte-identical archives
- An empty staging directory is an error, never an empty archive
"""
import logging
import zipfile
from pathlib import Path
from typing import List, Union

from credential_export.core.exceptions import ArchiveError

logger = logging.getLogger(__name__)

# Earliest timestamp a ZIP entry can carry
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)

# rw------- for every entry; the archive holds secret material
ENTRY_MODE = 0o600


class ArchiveAssembler:
    """Deterministic ZIP builder for a staging directory."""

    def collect_files(self, staging_dir: Path) -> List[Path]:
        """
        Collect all regular files under staging_dir, sorted by relative path.

        Raises:
            ArchiveError: If staging_dir is missing or unreadable
        """
        if not staging_dir.is_dir():
            raise ArchiveError(f"Staging directory {staging_dir} does not exist")

        try:
            files = [p for p in staging_dir.rglob("*") if p.is_file()]
        except OSError as e:
            raise ArchiveError(f"Staging directory {staging_dir} is unreadable: {e}") from e

        files.sort(key=lambda p: p.relative_to(staging_dir).as_posix())
        return files

    def assemble(
        self, staging_dir: Union[str, Path], archive_path: Union[str, Path]
    ) -> Path:
        """
        Write the ZIP archive for staging_dir at archive_path.

        Args:
            staging_dir: Directory holding manifest.csv and keys/
            archive_path: Destination of the ZIP (outside staging_dir)

        Returns:
            Path to the written archive

        Raises:
            ArchiveError: If there is nothing to archive or writing fails
        """
        staging_dir = Path(staging_dir)
        archive_path = Path(archive_path)

        files = self.collect_files(staging_dir)
        if not files:
            logger.error(f"Refusing to build empty archive from {staging_dir}")
            raise ArchiveError(f"Staging directory {staging_dir} contains no files to archive")

        try:
            with zipfile.ZipFile(archive_path, "x", zipfile.ZIP_DEFLATED) as zf:
                for full in files:
                    info = zipfile.ZipInfo(full.relative_to(staging_dir).as_posix(), ZIP_EPOCH)
                    info.compress_type = zipfile.ZIP_DEFLATED
                    info.external_attr = ENTRY_MODE << 16
                    zf.writestr(info, full.read_bytes())
        except FileExistsError as e:
            # Another export owns this path; leave it alone
            raise ArchiveError(f"Archive {archive_path} already exists") from e
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            logger.error(f"Failed to write archive {archive_path}: {e}")
            archive_path.unlink(missing_ok=True)
            raise ArchiveError(f"Failed to write archive {archive_path}: {e}") from e

        logger.info(f"Archived {len(files)} files from {staging_dir} to {archive_path}")
        return archive_path
