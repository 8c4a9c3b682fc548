"""
Database Schemas

MongoDB collection schemas for the shop, as Pydantic models.
Model name is converted to lowercase plural for the collection name:
- Game -> "games" collection
- Customer -> "customers" collection

No field is required and unknown fields are dropped. The only rule the
store enforces is a unique index on the business `id` of each collection.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# -----------------------------------------------------------------------------
# Video games
# -----------------------------------------------------------------------------

class Game(BaseModel):
    """Games collection schema (collection name: games)"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = Field(None, description="Business id, unique, chosen by the client")
    title: Optional[str] = Field(None, description="Game title")
    editor: Optional[str] = Field(None, description="Publisher")
    platforms: Optional[List[str]] = Field(None, description="Platforms, kept in the given order")
    quantity: Optional[int] = Field(None, description="Units in stock")

    @field_validator("platforms", mode="before")
    @classmethod
    def wrap_single_platform(cls, v):
        # a form with one platform field sends a bare string
        if isinstance(v, str):
            return [v]
        return v

# -----------------------------------------------------------------------------
# Customer accounts
# -----------------------------------------------------------------------------

class Customer(BaseModel):
    """Customers collection schema (collection name: customers)"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = Field(None, description="Business id, unique, chosen by the client")
    name: Optional[str] = Field(None, description="Last name")
    firstName: Optional[str] = Field(None, description="First name")
    dateOfBirth: Optional[date] = Field(None, description="Date of birth (YYYY-MM-DD)")
    address: Optional[str] = Field(None, description="Postal address")
    phoneNumber: Optional[str] = Field(None, description="Phone number")
    points: Optional[int] = Field(None, description="Loyalty points")
