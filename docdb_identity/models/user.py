"""
User model for the identity database.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return value as an aware UTC datetime; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UserLoginInfo(BaseModel):
    """External login binding: a provider name plus that provider's user key."""
    login_provider: str = Field(..., description="External authentication provider")
    provider_key: str = Field(..., description="User key issued by the provider")

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def matches(self, other: "UserLoginInfo") -> bool:
        return (
            self.login_provider == other.login_provider
            and self.provider_key == other.provider_key
        )


class Claim(BaseModel):
    """Claim value exchanged with the authentication framework."""
    type: str = Field(..., description="Claim type")
    value: str = Field(..., description="Claim value")

    class Config:
        frozen = True


class IdentityUserClaim(BaseModel):
    """Claim as stored inside a user document."""
    id: Optional[str] = Field(None, description="Claim identifier")
    user_id: Optional[str] = Field(None, description="Owning user ID")
    claim_type: str = Field(..., description="Claim type")
    claim_value: str = Field(..., description="Claim value")

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def matches(self, claim: Claim) -> bool:
        return self.claim_type == claim.type and self.claim_value == claim.value

    def to_claim(self) -> Claim:
        return Claim(type=self.claim_type, value=self.claim_value)


class IdentityUser(BaseModel):
    """
    User document model for MongoDB identity_db.users collection.
    
    Subclass it to persist extra account properties; the user store saves
    and loads every declared field.
    """
    id: Optional[str] = Field(None, alias="_id", description="Document ID, a UUID string unless set by the caller")
    user_name: Optional[str] = Field(None, description="Unique user name")
    email: Optional[str] = Field(None, description="Email address")
    email_confirmed: bool = Field(
        default=False,
        description="True if the email is confirmed"
    )
    password_hash: Optional[str] = Field(
        None,
        description="Salted/hashed form of the user password"
    )
    security_stamp: Optional[str] = Field(
        None,
        description="Random value that changes whenever the user's credentials change"
    )
    phone_number: Optional[str] = Field(None, description="Phone number")
    phone_number_confirmed: bool = Field(
        default=False,
        description="True if the phone number is confirmed"
    )
    two_factor_enabled: bool = Field(
        default=False,
        description="Is two factor enabled for the user"
    )
    lockout_end: Optional[datetime] = Field(
        None,
        description="UTC time when lockout ends; any time in the past is not locked out"
    )
    lockout_enabled: bool = Field(
        default=False,
        description="Is lockout enabled for this user"
    )
    access_failed_count: int = Field(
        default=0,
        description="Failed access attempts counted towards lockout"
    )
    logins: list[UserLoginInfo] = Field(default_factory=list, description="External logins")
    claims: list[IdentityUserClaim] = Field(default_factory=list, description="User claims")
    roles: list[str] = Field(default_factory=list, description="Role names")

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("lockout_end")
    @classmethod
    def normalize_lockout_end(cls, value: Optional[datetime]) -> Optional[datetime]:
        # MongoDB hands datetimes back as naive UTC
        return as_utc(value)

    def to_mongo_doc(self) -> dict:
        """Convert to MongoDB document format."""
        return self.model_dump(by_alias=True, exclude_none=False)

    @classmethod
    def from_mongo_doc(cls, doc: dict) -> "IdentityUser":
        """Create from MongoDB document."""
        return cls.model_validate(doc)
