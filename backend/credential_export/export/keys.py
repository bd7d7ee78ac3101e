"""
SSH key extraction.

Rows carrying an SSH private key get the key written to keys/<username>-<private_id>
inside the staging directory, and the manifest cell replaced by that file name.
"""
import logging
import re
from pathlib import Path
from typing import Any

from credential_export.core.exceptions import KeyWriteError
from credential_export.export.modes import SSH_KEY_TYPE
from credential_export.export.projector import ProjectedRow, core_for

logger = logging.getLogger(__name__)

KEYS_SUBDIRECTORY_NAME = "keys"

_UNSAFE_CHARS = re.compile(r"[\\/\x00]")


def key_filename(username: Any, private_id: Any) -> str:
    """
    Build the key file name for a credential.

    Path separators in the username are replaced so the file always lands
    directly inside keys/.

    Examples:
        key_filename("root", 7) -> "root-7"
        key_filename("CORP\\admin", 12) -> "CORP_admin-12"
    """
    user = "" if username is None else str(username)
    return f"{_UNSAFE_CHARS.sub('_', user)}-{private_id}"


class KeyMaterialExtractor:
    """
    Moves SSH private keys out of manifest rows into side files.

    Features:
    - Payload written verbatim (bytes as-is, text as UTF-8, no newline translation)
    - keys/ created on first key
    - Manifest row references the key by base name only
    """

    def __init__(self, staging_dir: Path):
        self.staging_dir = Path(staging_dir)
        self.keys_dir = self.staging_dir / KEYS_SUBDIRECTORY_NAME
        self.written: list[Path] = []

    def is_key_row(self, row: ProjectedRow) -> bool:
        return row.get("private_type") == SSH_KEY_TYPE

    def path_for_key(self, datum: Any) -> Path:
        """
        Return the key file path for a core or login record.

        Creates keys/ if it does not exist yet.
        """
        core = core_for(datum)
        public = getattr(core, "public", None)
        private = getattr(core, "private", None)
        filename = key_filename(
            getattr(public, "username", None),
            getattr(private, "id", None),
        )
        self.keys_dir.mkdir(parents=True, exist_ok=True)
        return self.keys_dir / filename

    def extract(self, datum: Any, row: ProjectedRow) -> ProjectedRow:
        """
        Extract key material from a projected row.

        Args:
            datum: Source record the row was projected from
            row: Projected row

        Returns:
            The row, with private_data replaced by the key file name
            when it holds an SSH key; otherwise unchanged

        Raises:
            KeyWriteError: If the key file cannot be written
        """
        if not self.is_key_row(row):
            return row

        private = getattr(core_for(datum), "private", None)
        payload = getattr(private, "data", None)

        try:
            key_path = self.path_for_key(datum)
            write_key_file(key_path, payload)
        except OSError as e:
            logger.error(f"Failed to write key material for private {getattr(private, 'id', None)}: {e}")
            raise KeyWriteError(f"Failed to write key file: {e}") from e

        self.written.append(key_path)
        logger.debug(f"Extracted SSH key to {KEYS_SUBDIRECTORY_NAME}/{key_path.name}")

        result = dict(row)
        result["private_data"] = key_path.name
        return result


def write_key_file(path: Path, data: Any) -> None:
    """
    Write key data at path, byte-for-byte.

    Args:
        path: Filesystem path where the key will be written
        data: Key payload (bytes, str or None)
    """
    if data is None:
        payload = b""
    elif isinstance(data, bytes):
        payload = data
    else:
        payload = str(data).encode("utf-8")

    with open(path, "wb") as f:
        f.write(payload)
