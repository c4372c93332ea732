"""
Appointment Schemas - Pydantic models for appointment validation and serialization.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from ..clients.schemas import ClientSummary
from ..procedures.schemas import ProcedureSummary
from .models import AppointmentStatus


class AppointmentCreate(BaseModel):
    client_id: int
    procedure_id: int
    time: datetime
    price: float = Field(..., ge=0)
    status: AppointmentStatus = AppointmentStatus.PENDING
    final_price: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class AppointmentUpdate(BaseModel):
    client_id: Optional[int] = None
    procedure_id: Optional[int] = None
    time: Optional[datetime] = None
    price: Optional[float] = Field(None, ge=0)
    status: Optional[AppointmentStatus] = None
    final_price: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class AppointmentResponse(BaseModel):
    """Appointment with its client and procedure embedded"""
    id: int
    client_id: Optional[int] = None
    procedure_id: Optional[int] = None
    time: datetime
    price: float
    status: AppointmentStatus
    final_price: Optional[float] = None
    notes: Optional[str] = None
    client: Optional[ClientSummary] = None
    procedure: Optional[ProcedureSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
