"""
Schedule Service - Business logic for the weekly schedule.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from ..core.validation import ValidationResult
from ..exceptions import NotFoundException, ValidationException
from .models import Schedule
from .schemas import ScheduleCreate, ScheduleUpdate

# Set up logging
logger = logging.getLogger(__name__)

DUPLICATE_DAY_MESSAGE = "Schedule already exists for this day"


def _duplicate_day(day_of_week: int) -> ValidationException:
    result = ValidationResult()
    result.add("day_of_week", DUPLICATE_DAY_MESSAGE)
    return ValidationException(DUPLICATE_DAY_MESSAGE, result)


def _find_by_day(db: Session, day_of_week: int) -> Optional[Schedule]:
    return db.query(Schedule).filter(Schedule.day_of_week == day_of_week).first()


def _commit(db: Session, action: str, day_of_week: Optional[int]) -> None:
    try:
        db.commit()
    except IntegrityError:
        # Unique day_of_week lost a race with a concurrent write
        db.rollback()
        logger.warning(f"Duplicate schedule for day {day_of_week} while trying to {action}")
        raise _duplicate_day(day_of_week)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error trying to {action} schedule: {str(e)}")
        raise


def list_schedules(db: Session) -> List[Schedule]:
    logger.info("Fetching all schedules")
    return db.query(Schedule).order_by(Schedule.day_of_week).all()


def get_schedule_by_day(db: Session, day_of_week: int) -> Schedule:
    """
    Get the schedule for a day of the week.

    Raises:
        NotFoundException: If that day has no schedule
    """
    schedule = _find_by_day(db, day_of_week)
    if not schedule:
        logger.warning(f"Schedule not found for day: {day_of_week}")
        raise NotFoundException("Schedule not found")
    return schedule


def get_schedule(db: Session, schedule_id: int) -> Schedule:
    schedule = db.get(Schedule, schedule_id)
    if not schedule:
        logger.warning(f"Schedule not found with id: {schedule_id}")
        raise NotFoundException("Schedule not found")
    return schedule


def create_schedule(db: Session, data: ScheduleCreate) -> Schedule:
    """
    Create the schedule for a day.

    Raises:
        ValidationException: If the day already has a schedule
    """
    if _find_by_day(db, data.day_of_week):
        logger.warning(f"Schedule already exists for day: {data.day_of_week}")
        raise _duplicate_day(data.day_of_week)

    schedule = Schedule(**data.model_dump())
    db.add(schedule)
    _commit(db, "create", data.day_of_week)
    db.refresh(schedule)
    logger.info(f"Schedule for day {schedule.day_of_week} created")
    return schedule


def update_schedule(db: Session, schedule_id: int, data: ScheduleUpdate) -> Schedule:
    schedule = get_schedule(db, schedule_id)
    # Every schedule column is required; an explicit null leaves it unchanged
    values = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    day = values.get("day_of_week")
    if day is not None and day != schedule.day_of_week and _find_by_day(db, day):
        logger.warning(f"Cannot move schedule {schedule_id} to taken day {day}")
        raise _duplicate_day(day)

    for field, value in values.items():
        setattr(schedule, field, value)
    _commit(db, "update", schedule.day_of_week)
    db.refresh(schedule)
    logger.info(f"Schedule {schedule_id} updated")
    return schedule


def delete_schedule(db: Session, schedule_id: int) -> None:
    schedule = get_schedule(db, schedule_id)
    db.delete(schedule)
    _commit(db, "delete", schedule.day_of_week)
    logger.info(f"Schedule {schedule_id} deleted")
