"""
Client Schemas - Pydantic models for client validation and serialization.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class ClientBase(BaseModel):
    name: str = Field(..., min_length=1, description="First name")
    sur_name: str = Field(..., min_length=1, description="Last name")
    phone_num: str = Field(..., min_length=1, description="Contact phone number")
    instagram: Optional[str] = Field(None, description="Instagram handle")
    trust_rating: int = Field(5, ge=1, le=5, description="1 (unreliable) to 5 (reliable)")


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    """All fields optional; only the ones sent are changed."""
    name: Optional[str] = Field(None, min_length=1)
    sur_name: Optional[str] = Field(None, min_length=1)
    phone_num: Optional[str] = Field(None, min_length=1)
    instagram: Optional[str] = None
    trust_rating: Optional[int] = Field(None, ge=1, le=5)


class ClientResponse(ClientBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClientSummary(BaseModel):
    """Embedded in appointment responses"""
    id: int
    name: str
    sur_name: str
    phone_num: str

    class Config:
        from_attributes = True
