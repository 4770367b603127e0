"""
User schemas for API validation and serialization.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from core.schema_base import HTTPSchemaModel, PartialUpdateModel
from db.enums import UserRole

NATIONAL_ID_PATTERN = r"^\d{16}$"
FAMILY_CARD_PATTERN = r"^\d{16}$"
NEIGHBORHOOD_UNIT_PATTERN = r"^00\d{1,2}$"


class UserBase(HTTPSchemaModel):
    """Base user schema with profile fields."""
    full_name: str = Field(..., min_length=1, max_length=255)
    national_id: str = Field(..., pattern=NATIONAL_ID_PATTERN, description="NIK")
    family_card_number: str = Field(..., pattern=FAMILY_CARD_PATTERN, description="No. KK")
    home_address: str = Field(..., min_length=1)
    neighborhood_unit_code: str = Field(..., pattern=NEIGHBORHOOD_UNIT_PATTERN, description="RT")


class UserCreate(UserBase):
    """Schema for registering a citizen or admin account."""
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.WARGA


class UserUpdate(PartialUpdateModel):
    """Schema for admin updates of citizen records. Username and role are immutable."""
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    national_id: Optional[str] = Field(None, pattern=NATIONAL_ID_PATTERN)
    family_card_number: Optional[str] = Field(None, pattern=FAMILY_CARD_PATTERN)
    home_address: Optional[str] = Field(None, min_length=1)
    neighborhood_unit_code: Optional[str] = Field(None, pattern=NEIGHBORHOOD_UNIT_PATTERN)


class UserRead(UserBase):
    """Schema for reading user data. The password hash never leaves the service."""
    id: int
    username: str
    role: UserRole
    created_at: datetime
    updated_at: datetime


class UserListItem(HTTPSchemaModel):
    """Lightweight schema for user lists."""
    id: int
    username: str
    role: UserRole
    full_name: str
    national_id: str
    neighborhood_unit_code: str
