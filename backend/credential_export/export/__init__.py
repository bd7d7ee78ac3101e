"""
Export module for credential manifests and archives.
"""
from credential_export.export.modes import ExportMode, HEADERS, CORE_HEADERS, LOGIN_HEADERS, resolve_mode
from credential_export.export.projector import project, line_for_core, line_for_login
from credential_export.export.keys import KeyMaterialExtractor, SSH_KEY_TYPE, KEYS_SUBDIRECTORY_NAME
from credential_export.export.manifest import ManifestWriter, MANIFEST_FILE_NAME
from credential_export.export.archive import ArchiveAssembler
from credential_export.export.staging import StagingArea

__all__ = [
    "ExportMode",
    "HEADERS",
    "CORE_HEADERS",
    "LOGIN_HEADERS",
    "resolve_mode",
    "project",
    "line_for_core",
    "line_for_login",
    "KeyMaterialExtractor",
    "SSH_KEY_TYPE",
    "KEYS_SUBDIRECTORY_NAME",
    "ManifestWriter",
    "MANIFEST_FILE_NAME",
    "ArchiveAssembler",
    "StagingArea",
]
