"""
Client Service - Business logic for client records.
"""
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..exceptions import NotFoundException
from .models import Client
from .schemas import ClientCreate, ClientUpdate

# Set up logging
logger = logging.getLogger(__name__)


def list_clients(db: Session) -> List[Client]:
    """Return all clients, oldest first."""
    logger.info("Fetching all clients")
    return db.query(Client).order_by(Client.id).all()


def get_client(db: Session, client_id: int) -> Client:
    """
    Get a client by ID.

    Raises:
        NotFoundException: If the client does not exist
    """
    client = db.get(Client, client_id)
    if not client:
        logger.warning(f"Client not found with id: {client_id}")
        raise NotFoundException("Client not found")
    return client


def create_client(db: Session, data: ClientCreate) -> Client:
    client = Client(**data.model_dump())
    db.add(client)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating client: {str(e)}")
        raise
    db.refresh(client)
    logger.info(f"Client {client.id} created")
    return client


def update_client(db: Session, client_id: int, data: ClientUpdate) -> Client:
    """
    Update the fields that were sent.

    Raises:
        NotFoundException: If the client does not exist
    """
    client = get_client(db, client_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        # Only instagram may be cleared
        if value is not None or field == "instagram":
            setattr(client, field, value)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating client {client_id}: {str(e)}")
        raise
    db.refresh(client)
    logger.info(f"Client {client_id} updated")
    return client


def delete_client(db: Session, client_id: int) -> None:
    """Delete a client; its appointments are kept without a client."""
    client = get_client(db, client_id)
    db.delete(client)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting client {client_id}: {str(e)}")
        raise
    logger.info(f"Client {client_id} deleted")
