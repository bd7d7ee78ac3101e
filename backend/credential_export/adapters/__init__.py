"""
Adapters - concrete implementations of ports.

Current implementation uses SQLAlchemy (SQLite by default).
"""
from credential_export.adapters.repositories_sqlite import SQLiteCredentialSource

__all__ = ["SQLiteCredentialSource"]
