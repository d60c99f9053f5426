"""
Service layer for identity storage.
"""
from docdb_identity.services.user_store import UserStore

__all__ = [
    "UserStore",
]
