"""
Global test fixtures for docdb-identity.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- User store bound to the mock users collection
- Test user factories
"""

import pytest
import pytest_asyncio


# =============================================================================
# MongoDB Fixtures (mongomock)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    
    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_identity_db(mock_async_mongo_client):
    """Provide mock identity_db database."""
    db = mock_async_mongo_client["identity_db"]
    yield db


@pytest_asyncio.fixture
async def users_collection(mock_identity_db):
    """Provide the mock users collection."""
    yield mock_identity_db["users"]


# =============================================================================
# User Store Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def user_store(users_collection):
    """UserStore for IdentityUser documents on the mock collection."""
    from docdb_identity.services.user_store import UserStore
    
    store = UserStore(users_collection)
    yield store
    store.dispose()


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user():
    """A user that has not been stored yet."""
    from docdb_identity.models.user import IdentityUser
    
    return IdentityUser(user_name="testUser01", email="testUser01@test.com")


@pytest.fixture
def test_login():
    """External login pair."""
    from docdb_identity.models.user import UserLoginInfo
    
    return UserLoginInfo(login_provider="ATestLoginProvider", provider_key="ATestKey292929")


@pytest.fixture
def mock_user_doc() -> dict:
    """A complete user document as stored in MongoDB."""
    return {
        "_id": "6f1c2a9e-3b1d-4c55-9a0e-2d6f4f1b7c11",
        "userName": "testUser02",
        "email": "testUser02@test.com",
        "emailConfirmed": True,
        "passwordHash": "AQAAAAEAACcQAAAAEHashedPassword==",
        "securityStamp": "6c1a4b57-5b1f-4a3e-8f5d-0a6e2f9d3b21",
        "phoneNumber": "+15555550100",
        "phoneNumberConfirmed": False,
        "twoFactorEnabled": False,
        "lockoutEnd": None,
        "lockoutEnabled": True,
        "accessFailedCount": 2,
        "logins": [
            {"loginProvider": "Google", "providerKey": "google-123"},
        ],
        "claims": [
            {"id": None, "userId": "6f1c2a9e-3b1d-4c55-9a0e-2d6f4f1b7c11",
             "claimType": "department", "claimValue": "sales"},
        ],
        "roles": ["user"],
    }
