"""
docdb-identity - Identity user store backed by MongoDB.
"""
from docdb_identity.core.exceptions import (
    IdentityStoreError,
    InvalidArgumentError,
    InvalidOperationError,
    ObjectDisposedError,
)
from docdb_identity.models.user import (
    Claim,
    IdentityUser,
    IdentityUserClaim,
    UserLoginInfo,
)
from docdb_identity.services.user_store import UserStore

__version__ = "0.1.0"

__all__ = [
    "Claim",
    "IdentityUser",
    "IdentityUserClaim",
    "UserLoginInfo",
    "UserStore",
    "IdentityStoreError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "ObjectDisposedError",
]
