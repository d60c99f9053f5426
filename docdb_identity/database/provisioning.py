"""
Database provisioning.
Creates the identity database, users collection and indexes if they are absent.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import CollectionInvalid

from docdb_identity.database.databases.identity_db import Fields

logger = logging.getLogger(__name__)


async def ensure_database_and_collection(
    client: AsyncIOMotorClient,
    database_name: str,
    collection_name: str,
) -> AsyncIOMotorCollection:
    """
    Make sure the users collection exists, creating it when it is missing.
    
    MongoDB creates a database together with its first collection, so a
    missing database is handled by the same step.
    
    Args:
        client: Motor client
        database_name: Name of the identity database
        collection_name: Name of the users collection
        
    Returns:
        The users collection with its indexes in place
    """
    db = client[database_name]
    
    existing = await db.list_collection_names()
    if collection_name not in existing:
        try:
            await db.create_collection(collection_name)
            logger.info(f"Created collection {database_name}.{collection_name}")
        except CollectionInvalid:
            # Created by someone else between the check and the create
            logger.debug(f"Collection {database_name}.{collection_name} already exists")
    
    collection = db[collection_name]
    await create_user_indexes(collection)
    return collection


async def create_user_indexes(collection: AsyncIOMotorCollection) -> None:
    """Create the lookup indexes used by the user store."""
    await collection.create_index(Fields.USER_NAME)
    await collection.create_index(Fields.EMAIL)
    await collection.create_index(
        [
            (f"{Fields.LOGINS}.{Fields.LOGIN_PROVIDER}", ASCENDING),
            (f"{Fields.LOGINS}.{Fields.PROVIDER_KEY}", ASCENDING),
        ]
    )
    logger.info(f"User indexes ensured on {collection.name}")
