"""
Row projection - flattens a credential record into an ordered manifest row.

- CORE mode: username, private_type, private_data, realm_key, realm_value
- LOGIN mode: CORE fields + host_address, service_port, service_name, service_protocol

Missing components (no realm, no service, ...) project as empty strings.
Bytes values must be UTF-8; the manifest never carries a lossy copy of a
secret. SSH key payloads are the exception: their cell is replaced by the
key file name, and the key itself is written byte-for-byte by export.keys.
"""
from typing import Any, Callable, Dict, Optional

from credential_export.core.exceptions import ManifestWriteError
from credential_export.export.modes import ExportMode, SSH_KEY_TYPE

ProjectedRow = Dict[str, str]


def _value(obj: Any, *path: str) -> str:
    """
    Follow an attribute path, returning "" if any link is missing.

    Examples:
        _value(core, "realm", "key") -> "" when core.realm is None
        _value(login, "service", "port") -> "22"
    """
    for name in path:
        if obj is None:
            return ""
        obj = getattr(obj, name, None)

    if obj is None:
        return ""
    if isinstance(obj, bytes):
        try:
            return obj.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ManifestWriteError(
                f"{'.'.join(path)} is not valid UTF-8 and cannot be written to the manifest"
            ) from e
    return str(obj)


def _private_data(core: Any) -> str:
    """Manifest cell for the private data; SSH keys are left to the key extractor."""
    private = getattr(core, "private", None)
    if getattr(private, "type", None) == SSH_KEY_TYPE and isinstance(getattr(private, "data", None), bytes):
        return ""
    return _value(core, "private", "data")


def core_for(datum: Any) -> Optional[Any]:
    """Return the credential core behind a core or login record."""
    core = getattr(datum, "core", None)
    return core if core is not None else datum


def line_for_core(core: Any) -> ProjectedRow:
    """
    Project a credential core into a manifest row.

    Args:
        core: Record exposing public, private and realm components

    Returns:
        Row with the five core fields in header order
    """
    return {
        "username": _value(core, "public", "username"),
        "private_type": _value(core, "private", "type"),
        "private_data": _private_data(core),
        "realm_key": _value(core, "realm", "key"),
        "realm_value": _value(core, "realm", "value"),
    }


def line_for_login(login: Any) -> ProjectedRow:
    """
    Project a login into a manifest row.

    The core fields come first, followed by the service context.
    """
    result = line_for_core(getattr(login, "core", None))
    result.update({
        "host_address": _value(login, "service", "host", "address"),
        "service_port": _value(login, "service", "port"),
        "service_name": _value(login, "service", "name"),
        "service_protocol": _value(login, "service", "proto"),
    })
    return result


PROJECTORS: Dict[ExportMode, Callable[[Any], ProjectedRow]] = {
    ExportMode.CORE: line_for_core,
    ExportMode.LOGIN: line_for_login,
}


def project(record: Any, mode: ExportMode) -> ProjectedRow:
    """Project a record with the projection registered for mode."""
    return PROJECTORS[mode](record)
