"""
Schedule Router - Weekly schedule endpoints.

Not served through the response cache.
"""
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..auth.schemas import MessageResponse
from .schemas import ScheduleCreate, ScheduleUpdate, ScheduleResponse
from . import service

router = APIRouter(prefix="/api/schedules", tags=["Schedules"])


@router.get("", response_model=List[ScheduleResponse])
def list_schedules(db: Session = Depends(get_db)):
    return service.list_schedules(db)


@router.get("/{day_of_week}", response_model=ScheduleResponse)
def get_schedule_by_day(day_of_week: int = Path(..., ge=0, le=6), db: Session = Depends(get_db)):
    return service.get_schedule_by_day(db, day_of_week)


@router.post("", response_model=ScheduleResponse, status_code=status.HTTP_201_CREATED)
def create_schedule(payload: ScheduleCreate, db: Session = Depends(get_db)):
    return service.create_schedule(db, payload)


@router.put("/{schedule_id}", response_model=ScheduleResponse)
def update_schedule(schedule_id: int, payload: ScheduleUpdate, db: Session = Depends(get_db)):
    return service.update_schedule(db, schedule_id, payload)


@router.delete("/{schedule_id}", response_model=MessageResponse)
def delete_schedule(schedule_id: int, db: Session = Depends(get_db)):
    service.delete_schedule(db, schedule_id)
    return {"success": True, "message": "Schedule deleted"}
