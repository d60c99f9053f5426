"""
Pydantic models for database documents and data structures.
"""
from docdb_identity.models.user import (
    Claim,
    IdentityUser,
    IdentityUserClaim,
    UserLoginInfo,
)

__all__ = [
    "Claim",
    "IdentityUser",
    "IdentityUserClaim",
    "UserLoginInfo",
]
