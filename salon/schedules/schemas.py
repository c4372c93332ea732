"""
Schedule Schemas - Pydantic models for schedule validation and serialization.
"""
from typing import Dict, Optional
from datetime import datetime
import re
from pydantic import BaseModel, Field, field_validator

SLOT_KEYS = ("1", "2", "3", "4")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def check_time_table(value: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
    """Slots must be "1".."4" and every time must be HH:MM."""
    if value is None:
        return value
    for key, slot in value.items():
        if key not in SLOT_KEYS:
            raise ValueError(f"Unknown slot '{key}', expected one of 1-4")
        if not TIME_PATTERN.match(slot):
            raise ValueError(f"Slot {key} must be in HH:MM format")
    return value


class ScheduleBase(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    time_table: Dict[str, str] = Field(default_factory=dict)
    is_weekend: bool = False

    @field_validator("time_table")
    @classmethod
    def validate_time_table(cls, v):
        return check_time_table(v)


class ScheduleCreate(ScheduleBase):
    pass


class ScheduleUpdate(BaseModel):
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    time_table: Optional[Dict[str, str]] = None
    is_weekend: Optional[bool] = None

    @field_validator("time_table")
    @classmethod
    def validate_time_table(cls, v):
        return check_time_table(v)


class ScheduleResponse(ScheduleBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
