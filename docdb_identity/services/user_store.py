"""
User store backed by a MongoDB collection.

Implements the user, login, claim, role, password, security stamp, email,
lockout, two-factor and phone number store operations of an identity
framework by reading and writing whole user documents.
"""
import logging
import uuid
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from docdb_identity.config import Settings, get_settings
from docdb_identity.core.exceptions import (
    InvalidArgumentError,
    InvalidOperationError,
    ObjectDisposedError,
)
from docdb_identity.database.connections import get_mongo_client
from docdb_identity.database.databases.identity_db import Fields
from docdb_identity.database import provisioning
from docdb_identity.models.user import (
    Claim,
    IdentityUser,
    IdentityUserClaim,
    UserLoginInfo,
    as_utc,
)

logger = logging.getLogger(__name__)

TUser = TypeVar("TUser", bound=IdentityUser)


def _require(value: Any, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(name)


class UserStore(Generic[TUser]):
    """
    Identity user store for a single MongoDB collection.

    The collection is injected; the store never reaches for shared client
    state on its own. Use it as an async context manager to dispose it on
    exit:

        async with UserStore(collection) as store:
            user = await store.find_by_email("someone@example.com")
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        user_type: type[TUser] = IdentityUser,
        *,
        owns_client: bool = False,
    ):
        """
        Initialize with the users collection.

        Args:
            collection: Motor collection holding one document per user
            user_type: IdentityUser subclass to load documents into
            owns_client: Close the collection's client when the store is disposed
        """
        _require(collection, "collection")
        self.users_collection = collection
        self.user_type = user_type
        self._owns_client = owns_client
        self._disposed = False

    @classmethod
    async def open(
        cls,
        client: AsyncIOMotorClient,
        database_name: str,
        collection_name: str,
        *,
        user_type: type[TUser] = IdentityUser,
        ensure_database_and_collection: bool = False,
        owns_client: bool = False,
    ) -> "UserStore[TUser]":
        """
        Create a store for a named database and collection.

        Args:
            client: Motor client
            database_name: Identity database name
            collection_name: Users collection name
            user_type: IdentityUser subclass to load documents into
            ensure_database_and_collection: Create the collection and indexes if absent
            owns_client: Close the client when the store is disposed

        Returns:
            UserStore bound to the collection

        Raises:
            InvalidArgumentError: If the client or a name is missing
        """
        _require(client, "client")
        if not database_name:
            raise InvalidArgumentError("database_name")
        if not collection_name:
            raise InvalidArgumentError("collection_name")

        if ensure_database_and_collection:
            collection = await provisioning.ensure_database_and_collection(
                client, database_name, collection_name
            )
        else:
            collection = client[database_name][collection_name]

        return cls(collection, user_type, owns_client=owns_client)

    @classmethod
    async def from_uri(
        cls,
        mongo_uri: str,
        database_name: str,
        collection_name: str,
        *,
        user_type: type[TUser] = IdentityUser,
        ensure_database_and_collection: bool = False,
    ) -> "UserStore[TUser]":
        """
        Create a store with its own client for an endpoint URI.

        Credentials travel in the URI. The client is closed when the store
        is disposed.
        """
        if not mongo_uri:
            raise InvalidArgumentError("mongo_uri")

        client = AsyncIOMotorClient(mongo_uri)
        try:
            return await cls.open(
                client,
                database_name,
                collection_name,
                user_type=user_type,
                ensure_database_and_collection=ensure_database_and_collection,
                owns_client=True,
            )
        except BaseException:
            client.close()
            raise

    @classmethod
    async def from_settings(
        cls,
        settings: Optional[Settings] = None,
        *,
        user_type: type[TUser] = IdentityUser,
    ) -> "UserStore[TUser]":
        """Create a store on the shared client using configured names."""
        if settings is None:
            settings = get_settings()

        client = await get_mongo_client()
        return await cls.open(
            client,
            settings.identity_database,
            settings.users_collection,
            user_type=user_type,
            ensure_database_and_collection=settings.ensure_database_and_collection,
        )

    # ==================== Lifecycle ====================

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Dispose the store. Any later call raises ObjectDisposedError."""
        if self._disposed:
            return
        self._disposed = True
        if self._owns_client:
            self.users_collection.database.client.close()

    async def __aenter__(self) -> "UserStore[TUser]":
        self._throw_if_disposed()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def _throw_if_disposed(self) -> None:
        if self._disposed:
            raise ObjectDisposedError(type(self).__name__)

    # ==================== Queries ====================

    async def users(self, query: Optional[dict] = None) -> list[TUser]:
        """
        Get all users matching a MongoDB filter.

        Args:
            query: MongoDB filter document; all users when omitted

        Returns:
            List of matching users
        """
        self._throw_if_disposed()

        cursor = self.users_collection.find(query or {})
        return [self.user_type.from_mongo_doc(doc) async for doc in cursor]

    async def _find_one(self, query: dict) -> Optional[TUser]:
        user_doc = await self.users_collection.find_one(query)
        if not user_doc:
            return None
        return self.user_type.from_mongo_doc(user_doc)

    # ==================== Users ====================

    async def create(self, user: TUser) -> None:
        """
        Insert a new user document.

        Args:
            user: User to create; an id is assigned when it has none

        Raises:
            InvalidArgumentError: If user is None
            pymongo.errors.DuplicateKeyError: If the id is already taken
        """
        self._throw_if_disposed()
        _require(user, "user")

        if not user.id:
            user.id = str(uuid.uuid4())

        await self.users_collection.insert_one(user.to_mongo_doc())
        logger.debug(f"Created user {user.id}")

    async def delete(self, user: TUser) -> None:
        """
        Delete the stored document for a user.

        Deleting a user that was never stored does nothing.

        Raises:
            InvalidArgumentError: If user is None
        """
        self._throw_if_disposed()
        _require(user, "user")

        existing = await self.users_collection.find_one({Fields.ID: user.id})
        if existing is None:
            return

        await self.users_collection.delete_one({Fields.ID: user.id})
        logger.debug(f"Deleted user {user.id}")

    async def find_by_id(self, user_id: str) -> Optional[TUser]:
        """
        Get user by ID.

        Args:
            user_id: User document ID

        Returns:
            User or None if not found
        """
        self._throw_if_disposed()
        _require(user_id, "user_id")

        return await self._find_one({Fields.ID: user_id})

    async def find_by_name(self, user_name: str) -> Optional[TUser]:
        """Get user by user name, or None if not found."""
        self._throw_if_disposed()
        _require(user_name, "user_name")

        return await self._find_one({Fields.USER_NAME: user_name})

    async def find_by_email(self, email: str) -> Optional[TUser]:
        """Get user by email address, or None if not found."""
        self._throw_if_disposed()
        _require(email, "email")

        return await self._find_one({Fields.EMAIL: email})

    async def update(self, user: TUser) -> None:
        """
        Replace the stored document with the user's current values.

        Args:
            user: Previously created user

        Raises:
            InvalidArgumentError: If user is None
            InvalidOperationError: If the user was never created
        """
        self._throw_if_disposed()
        _require(user, "user")

        await self._replace_user(user)

    async def _replace_user(self, user: TUser) -> None:
        matched = 0
        if user.id:
            result = await self.users_collection.replace_one(
                {Fields.ID: user.id}, user.to_mongo_doc()
            )
            matched = result.matched_count
        if matched == 0:
            raise InvalidOperationError(
                "You can't call update on a user you haven't created yet."
            )

        logger.debug(f"Updated user {user.id}")

    # ==================== Logins ====================

    async def add_login(self, user: TUser, login: UserLoginInfo) -> None:
        """
        Add an external login to a user and save the user.

        Adding a login the user already has only saves the user.

        Raises:
            InvalidArgumentError: If user or login is None
            InvalidOperationError: If the user was never created
        """
        self._throw_if_disposed()
        _require(user, "user")
        _require(login, "login")

        if not any(existing.matches(login) for existing in user.logins):
            user.logins.append(login)

        await self._replace_user(user)

    async def remove_login(self, user: TUser, login: UserLoginInfo) -> None:
        """
        Remove an external login from a user and save the user.

        Raises:
            InvalidArgumentError: If user or login is None
            InvalidOperationError: If the user was never created
        """
        self._throw_if_disposed()
        _require(user, "user")
        _require(login, "login")

        for existing in user.logins:
            if existing.matches(login):
                user.logins.remove(existing)
                break

        await self._replace_user(user)

    async def get_logins(self, user: TUser) -> list[UserLoginInfo]:
        self._throw_if_disposed()
        _require(user, "user")

        return list(user.logins)

    async def find_by_login(self, login: UserLoginInfo) -> Optional[TUser]:
        """
        Get the user bound to an external login.

        Args:
            login: Provider name and key to look for

        Returns:
            First user holding that login, or None
        """
        self._throw_if_disposed()
        _require(login, "login")

        return await self._find_one({
            Fields.LOGINS: {
                "$elemMatch": {
                    Fields.LOGIN_PROVIDER: login.login_provider,
                    Fields.PROVIDER_KEY: login.provider_key,
                }
            }
        })

    # ==================== Claims ====================

    async def add_claim(self, user: TUser, claim: Claim) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        _require(claim, "claim")

        if not any(existing.matches(claim) for existing in user.claims):
            user.claims.append(
                IdentityUserClaim(
                    user_id=user.id,
                    claim_type=claim.type,
                    claim_value=claim.value,
                )
            )

    async def get_claims(self, user: TUser) -> list[Claim]:
        self._throw_if_disposed()
        _require(user, "user")

        return [c.to_claim() for c in user.claims]

    async def remove_claim(self, user: TUser, claim: Claim) -> None:
        """Remove every stored claim with the same type and value."""
        self._throw_if_disposed()
        _require(user, "user")
        _require(claim, "claim")

        user.claims[:] = [c for c in user.claims if not c.matches(claim)]

    # ==================== Roles ====================

    async def add_to_role(self, user: TUser, role_name: str) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        _require(role_name, "role_name")

        if role_name not in user.roles:
            user.roles.append(role_name)

    async def get_roles(self, user: TUser) -> list[str]:
        self._throw_if_disposed()
        _require(user, "user")

        return list(user.roles)

    async def is_in_role(self, user: TUser, role_name: str) -> bool:
        self._throw_if_disposed()
        _require(user, "user")
        _require(role_name, "role_name")

        return role_name in user.roles

    async def remove_from_role(self, user: TUser, role_name: str) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        _require(role_name, "role_name")

        if role_name in user.roles:
            user.roles.remove(role_name)

    # ==================== Password ====================

    async def get_password_hash(self, user: TUser) -> Optional[str]:
        self._throw_if_disposed()
        _require(user, "user")
        return user.password_hash

    async def has_password(self, user: TUser) -> bool:
        self._throw_if_disposed()
        _require(user, "user")
        return user.password_hash is not None

    async def set_password_hash(self, user: TUser, password_hash: Optional[str]) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        user.password_hash = password_hash

    # ==================== Security stamp ====================

    async def get_security_stamp(self, user: TUser) -> Optional[str]:
        self._throw_if_disposed()
        _require(user, "user")
        return user.security_stamp

    async def set_security_stamp(self, user: TUser, stamp: Optional[str]) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        user.security_stamp = stamp

    # ==================== Email ====================

    async def get_email(self, user: TUser) -> Optional[str]:
        self._throw_if_disposed()
        _require(user, "user")
        return user.email

    async def set_email(self, user: TUser, email: str) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        _require(email, "email")
        user.email = email

    async def get_email_confirmed(self, user: TUser) -> bool:
        self._throw_if_disposed()
        _require(user, "user")
        return user.email_confirmed

    async def set_email_confirmed(self, user: TUser, confirmed: bool) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        user.email_confirmed = confirmed

    # ==================== Lockout ====================

    async def get_lockout_end_date(self, user: TUser) -> Optional[datetime]:
        self._throw_if_disposed()
        _require(user, "user")
        return user.lockout_end

    async def set_lockout_end_date(self, user: TUser, lockout_end: Optional[datetime]) -> None:
        """Set when lockout ends; naive datetimes are taken as UTC."""
        self._throw_if_disposed()
        _require(user, "user")
        user.lockout_end = as_utc(lockout_end)

    async def get_lockout_enabled(self, user: TUser) -> bool:
        self._throw_if_disposed()
        _require(user, "user")
        return user.lockout_enabled

    async def set_lockout_enabled(self, user: TUser, enabled: bool) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        user.lockout_enabled = enabled

    async def get_access_failed_count(self, user: TUser) -> int:
        self._throw_if_disposed()
        _require(user, "user")
        return user.access_failed_count

    async def increment_access_failed_count(self, user: TUser) -> int:
        """Count one more failed access attempt and return the new count."""
        self._throw_if_disposed()
        _require(user, "user")
        user.access_failed_count += 1
        return user.access_failed_count

    async def reset_access_failed_count(self, user: TUser) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        user.access_failed_count = 0

    # ==================== Two-factor ====================

    async def get_two_factor_enabled(self, user: TUser) -> bool:
        self._throw_if_disposed()
        _require(user, "user")
        return user.two_factor_enabled

    async def set_two_factor_enabled(self, user: TUser, enabled: bool) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        user.two_factor_enabled = enabled

    # ==================== Phone number ====================

    async def get_phone_number(self, user: TUser) -> Optional[str]:
        self._throw_if_disposed()
        _require(user, "user")
        return user.phone_number

    async def set_phone_number(self, user: TUser, phone_number: str) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        _require(phone_number, "phone_number")
        user.phone_number = phone_number

    async def get_phone_number_confirmed(self, user: TUser) -> bool:
        self._throw_if_disposed()
        _require(user, "user")
        return user.phone_number_confirmed

    async def set_phone_number_confirmed(self, user: TUser, confirmed: bool) -> None:
        self._throw_if_disposed()
        _require(user, "user")
        user.phone_number_confirmed = confirmed
