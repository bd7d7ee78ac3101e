"""
Export error hierarchy.

Every failure in the export pipeline is fatal for that export and is raised
to the caller of CredentialExporter.export(). Nothing here is retried.
"""


class ExportError(Exception):
    """Base class for all credential export failures."""


class InvalidModeError(ExportError, ValueError):
    """Export mode is not one of the recognized modes."""


class RecordSourceError(ExportError):
    """The record source failed to return credential records."""


class StagingError(ExportError):
    """The staging directory could not be created."""


class KeyWriteError(ExportError):
    """Writing extracted key material to disk failed."""


class ManifestWriteError(ExportError):
    """Writing the manifest CSV failed."""


class ArchiveError(ExportError):
    """Building the output ZIP failed, or there was nothing to archive."""
