"""
Export modes and their manifest headers.
"""
import enum
from typing import Any, Optional, Tuple

from credential_export.core.exceptions import InvalidModeError


class ExportMode(str, enum.Enum):
    CORE = "core"
    LOGIN = "login"


DEFAULT_MODE = ExportMode.LOGIN

# Private type whose data is moved out of the manifest into keys/
SSH_KEY_TYPE = "SSHKey"

# Columns shared by every mode, in manifest order
CORE_HEADERS: Tuple[str, ...] = (
    "username",
    "private_type",
    "private_data",
    "realm_key",
    "realm_value",
)

LOGIN_HEADERS: Tuple[str, ...] = CORE_HEADERS + (
    "host_address",
    "service_port",
    "service_name",
    "service_protocol",
)

HEADERS = {
    ExportMode.CORE: CORE_HEADERS,
    ExportMode.LOGIN: LOGIN_HEADERS,
}


def resolve_mode(value: Optional[Any]) -> ExportMode:
    """
    Coerce a mode argument to ExportMode.

    None or "" selects DEFAULT_MODE. Strings are matched case-insensitively.

    Raises:
        InvalidModeError: If the value is not a recognized mode
    """
    if value is None or value == "":
        return DEFAULT_MODE
    if isinstance(value, ExportMode):
        return value
    if isinstance(value, str):
        try:
            return ExportMode(value.strip().lower())
        except ValueError:
            pass
    raise InvalidModeError(
        f"Invalid mode {value!r}; expected one of: "
        + ", ".join(m.value for m in ExportMode)
    )
