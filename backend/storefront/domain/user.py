"""
User Domain Model

Represents a buyer in the storefront. Only the birth date matters for order
validation; age is always derived from it, never stored.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime, date


class User(BaseModel):
    """
    User domain model

    Fields:
        id: Opaque user identifier (UUID string)
        name: Display name
        email: Contact email (unique)
        date_of_birth: Calendar birth date
        created_at: When the user was created
        updated_at: When the user was last updated
    """

    id: str = Field(..., description="User ID")
    name: str = Field(..., description="User name")
    email: str = Field(..., description="User email")
    date_of_birth: date = Field(..., description="Birth date")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    def age_on(self, today: date) -> int:
        """
        Age in whole years as of `today`, by calendar year only.

        Month and day are ignored: someone born 2000-12-31 is 1 on 2001-01-01.
        """
        return today.year - self.date_of_birth.year

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


class UserCreate(BaseModel):
    """Schema for creating a new user"""
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    date_of_birth: date
