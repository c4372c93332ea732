"""
Procedure Service - Business logic for the procedure catalogue.
"""
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..exceptions import NotFoundException
from .models import Procedure
from .schemas import ProcedureCreate, ProcedureUpdate

# Set up logging
logger = logging.getLogger(__name__)


def list_procedures(db: Session) -> List[Procedure]:
    logger.info("Fetching all procedures")
    return db.query(Procedure).order_by(Procedure.id).all()


def get_procedure(db: Session, procedure_id: int) -> Procedure:
    """
    Get a procedure by ID.

    Raises:
        NotFoundException: If the procedure does not exist
    """
    procedure = db.get(Procedure, procedure_id)
    if not procedure:
        logger.warning(f"Procedure not found with id: {procedure_id}")
        raise NotFoundException("Procedure not found")
    return procedure


def create_procedure(db: Session, data: ProcedureCreate) -> Procedure:
    procedure = Procedure(**data.model_dump())
    db.add(procedure)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating procedure: {str(e)}")
        raise
    db.refresh(procedure)
    logger.info(f"Procedure {procedure.id} created")
    return procedure


def update_procedure(db: Session, procedure_id: int, data: ProcedureUpdate) -> Procedure:
    procedure = get_procedure(db, procedure_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(procedure, field, value)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating procedure {procedure_id}: {str(e)}")
        raise
    db.refresh(procedure)
    logger.info(f"Procedure {procedure_id} updated")
    return procedure


def delete_procedure(db: Session, procedure_id: int) -> None:
    procedure = get_procedure(db, procedure_id)
    db.delete(procedure)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting procedure {procedure_id}: {str(e)}")
        raise
    logger.info(f"Procedure {procedure_id} deleted")
