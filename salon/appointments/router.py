"""
Appointment Router - CRUD endpoints for appointments.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..auth.schemas import MessageResponse
from .models import AppointmentStatus
from .schemas import AppointmentCreate, AppointmentUpdate, AppointmentResponse
from . import service

router = APIRouter(prefix="/api/appointments", tags=["Appointments"])


@router.get("", response_model=List[AppointmentResponse])
def list_appointments(
    status_filter: Optional[AppointmentStatus] = Query(None, alias="status"),
    client_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    return service.list_appointments(db, status=status_filter, client_id=client_id)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(appointment_id: int, db: Session = Depends(get_db)):
    return service.get_appointment(db, appointment_id)


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(payload: AppointmentCreate, db: Session = Depends(get_db)):
    return service.create_appointment(db, payload)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(appointment_id: int, payload: AppointmentUpdate, db: Session = Depends(get_db)):
    return service.update_appointment(db, appointment_id, payload)


@router.delete("/{appointment_id}", response_model=MessageResponse)
def delete_appointment(appointment_id: int, db: Session = Depends(get_db)):
    service.delete_appointment(db, appointment_id)
    return {"success": True, "message": "Appointment deleted"}
