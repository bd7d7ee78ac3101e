"""
Ports - interface definitions for external dependencies.

Follows hexagonal architecture pattern (ports & adapters).
Ports define interfaces, adapters provide concrete implementations.
"""
from credential_export.ports.repositories import CredentialSource

__all__ = ["CredentialSource"]
