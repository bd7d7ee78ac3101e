"""
Staging area for one export run.

Layout:
    <base>/export-<epoch>/          staging directory (manifest.csv, keys/)
    <base>/export-<epoch>.zip       output archive, sibling of the staging directory

<base> is a fresh temp directory unless one is injected. The epoch comes
from an injectable clock so callers and tests can pin the names.
"""
import logging
import shutil
import tempfile
import time
from pathlib import Path
from typing import Callable, Optional, Union

from credential_export.core.config import settings
from credential_export.core.exceptions import StagingError

logger = logging.getLogger(__name__)

SUBDIRECTORY_PREFIX = "export-"

Clock = Callable[[], float]


def subdirectory_name(clock: Clock = time.time) -> str:
    """
    Name of the staging subdirectory.

    Examples:
        subdirectory_name(lambda: 1700000000.7) -> "export-1700000000"
    """
    return f"{SUBDIRECTORY_PREFIX}{int(clock())}"


class StagingArea:
    """
    Owns the staging directory and archive path of a single export.

    Paths are fixed at construction (name) and prepare() (base directory).
    prepare() is idempotent; nothing touches the filesystem before it.
    """

    def __init__(
        self,
        base_dir: Optional[Union[str, Path]] = None,
        clock: Optional[Clock] = None,
        temp_prefix: Optional[str] = None,
        temp_root: Optional[str] = None,
    ):
        self.subdirectory_name = subdirectory_name(clock or time.time)
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.temp_prefix = temp_prefix or settings.EXPORT_TEMP_PREFIX
        self.temp_root = temp_root if temp_root is not None else settings.EXPORT_ROOT
        self._prepared = False
        self._owns_base = False

    @property
    def zip_filename(self) -> str:
        return self.subdirectory_name + ".zip"

    @property
    def directory(self) -> Path:
        """The staging directory, <base>/export-<epoch>."""
        return self._base() / self.subdirectory_name

    @property
    def archive_path(self) -> Path:
        """The output archive, <base>/export-<epoch>.zip."""
        return self._base() / self.zip_filename

    def _base(self) -> Path:
        if self.base_dir is None:
            raise StagingError("Staging area has not been prepared")
        return self.base_dir

    def prepare(self) -> Path:
        """
        Create the staging directory.

        Returns:
            The staging directory

        Raises:
            StagingError: If the directory cannot be created or is already in use
        """
        if self._prepared:
            return self.directory

        try:
            if self.base_dir is None:
                if self.temp_root:
                    Path(self.temp_root).mkdir(parents=True, exist_ok=True)
                self.base_dir = Path(tempfile.mkdtemp(prefix=self.temp_prefix, dir=self.temp_root or None))
                self._owns_base = True
            else:
                self.base_dir.mkdir(parents=True, exist_ok=True)
            self.directory.mkdir(exist_ok=False)
        except FileExistsError as e:
            raise StagingError(f"Staging directory {self.directory} is already in use") from e
        except OSError as e:
            raise StagingError(f"Failed to create staging directory: {e}") from e

        self._prepared = True
        logger.debug(f"Prepared staging directory {self.directory}")
        return self.directory

    def cleanup(self) -> bool:
        """
        Remove the staging directory, leaving the archive in place.

        Returns:
            True if a directory was removed
        """
        if not self._prepared or not self.directory.exists():
            return False
        shutil.rmtree(self.directory)
        logger.info(f"Removed staging directory {self.directory}")
        return True

    def discard(self) -> None:
        """
        Remove everything this export put on disk: staging directory and archive.

        A temp base directory created by prepare() is removed as a whole;
        an injected base directory is kept.
        """
        if not self._prepared:
            return
        if self._owns_base:
            if self.base_dir.exists():
                shutil.rmtree(self.base_dir)
        else:
            if self.directory.exists():
                shutil.rmtree(self.directory)
            self.archive_path.unlink(missing_ok=True)
        self._prepared = False
        logger.info(f"Discarded export files for {self.subdirectory_name}")
