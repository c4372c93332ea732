"""
Appointment Service - Business logic for booking and updating appointments.

Appointments reference a client and a procedure; both must exist when they
are set, otherwise the request is rejected as invalid input.
"""
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..clients.models import Client
from ..core.clock import to_naive_utc
from ..core.validation import ValidationResult
from ..exceptions import NotFoundException, ValidationException
from ..procedures.models import Procedure
from .models import Appointment, AppointmentStatus
from .schemas import AppointmentCreate, AppointmentUpdate

# Set up logging
logger = logging.getLogger(__name__)

NULLABLE_FIELDS = ("final_price", "notes")


def _with_relations(db: Session):
    return db.query(Appointment).options(
        joinedload(Appointment.client),
        joinedload(Appointment.procedure),
    )


def _check_references(db: Session, data: Dict[str, Any]) -> None:
    """
    Make sure referenced client and procedure exist.

    Raises:
        ValidationException: Naming each missing reference
    """
    result = ValidationResult()
    if data.get("client_id") is not None and db.get(Client, data["client_id"]) is None:
        logger.warning(f"Client with id {data['client_id']} not found")
        result.add("client_id", "Client not found")
    if data.get("procedure_id") is not None and db.get(Procedure, data["procedure_id"]) is None:
        logger.warning(f"Procedure with id {data['procedure_id']} not found")
        result.add("procedure_id", "Procedure not found")
    if not result.valid:
        raise ValidationException(result.errors[0].message, result)


def list_appointments(
    db: Session,
    status: Optional[AppointmentStatus] = None,
    client_id: Optional[int] = None,
) -> List[Appointment]:
    """
    Get appointments, optionally filtered.

    Args:
        db: Database session
        status: Only appointments in this status
        client_id: Only appointments of this client

    Returns:
        List of appointments ordered by time
    """
    logger.info("Fetching all appointments")
    query = _with_relations(db)
    if status is not None:
        query = query.filter(Appointment.status == status)
    if client_id is not None:
        query = query.filter(Appointment.client_id == client_id)
    return query.order_by(Appointment.time).all()


def get_appointment(db: Session, appointment_id: int) -> Appointment:
    """
    Get an appointment by ID.

    Raises:
        NotFoundException: If the appointment does not exist
    """
    appointment = _with_relations(db).filter(Appointment.id == appointment_id).first()
    if not appointment:
        logger.warning(f"Appointment not found with id: {appointment_id}")
        raise NotFoundException("Appointment not found")
    return appointment


def create_appointment(db: Session, data: AppointmentCreate) -> Appointment:
    values = data.model_dump()
    _check_references(db, values)
    values["time"] = to_naive_utc(values["time"])

    appointment = Appointment(**values)
    db.add(appointment)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating appointment: {str(e)}")
        raise
    logger.info(f"Appointment {appointment.id} created")
    return get_appointment(db, appointment.id)


def update_appointment(db: Session, appointment_id: int, data: AppointmentUpdate) -> Appointment:
    appointment = get_appointment(db, appointment_id)
    values = {
        k: v for k, v in data.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_FIELDS
    }
    _check_references(db, values)
    if values.get("time") is not None:
        values["time"] = to_naive_utc(values["time"])

    for field, value in values.items():
        setattr(appointment, field, value)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating appointment {appointment_id}: {str(e)}")
        raise
    logger.info(f"Appointment {appointment_id} updated")
    return get_appointment(db, appointment_id)


def delete_appointment(db: Session, appointment_id: int) -> None:
    appointment = get_appointment(db, appointment_id)
    db.delete(appointment)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting appointment {appointment_id}: {str(e)}")
        raise
    logger.info(f"Appointment {appointment_id} deleted")
