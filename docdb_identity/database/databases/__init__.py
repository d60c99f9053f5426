"""
Database definitions.
"""
from docdb_identity.database.databases import identity_db

__all__ = ["identity_db"]
