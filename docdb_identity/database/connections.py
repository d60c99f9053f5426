"""
Shared MongoDB client for stores built from settings.

Stores opened with UserStore.from_settings share one client per process;
it is created on first use and closed by the host at shutdown.
"""
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from docdb_identity.config import get_settings

_mongo_client: Optional[AsyncIOMotorClient] = None


async def get_mongo_client() -> AsyncIOMotorClient:
    """Return the shared client, connecting to the configured mongo_uri on first call."""
    global _mongo_client
    if _mongo_client is None:
        _mongo_client = AsyncIOMotorClient(get_settings().mongo_uri)
    return _mongo_client


async def close_connections():
    """Close the shared client; the next get_mongo_client call reconnects."""
    global _mongo_client
    
    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None


async def get_database(db_name: str) -> AsyncIOMotorDatabase:
    """
    Get a database handle on the shared client.
    
    Args:
        db_name: Database name, usually Settings.identity_database
    """
    client = await get_mongo_client()
    return client[db_name]
