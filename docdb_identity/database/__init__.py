"""
Database module - MongoDB connection, provisioning and database definitions.
"""
from docdb_identity.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
)
from docdb_identity.database.databases import identity_db
from docdb_identity.database.provisioning import (
    ensure_database_and_collection,
    create_user_indexes,
)

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "identity_db",
    "ensure_database_and_collection",
    "create_user_indexes",
]
