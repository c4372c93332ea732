"""
Procedure Schemas - Pydantic models for procedure validation and serialization.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class ProcedureBase(BaseModel):
    name: str = Field(..., min_length=1, description="Procedure name")
    price: float = Field(..., ge=0, description="List price")
    time_to_complete: int = Field(..., gt=0, description="Duration in minutes")


class ProcedureCreate(ProcedureBase):
    pass


class ProcedureUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    time_to_complete: Optional[int] = Field(None, gt=0)


class ProcedureResponse(ProcedureBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProcedureSummary(BaseModel):
    """Embedded in appointment responses"""
    id: int
    name: str
    price: float
    time_to_complete: int

    class Config:
        from_attributes = True
