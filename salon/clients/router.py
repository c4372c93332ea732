"""
Client Router - CRUD endpoints for client records.

Reads are served through the response cache; every successful write
flushes it.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..auth.schemas import MessageResponse
from .schemas import ClientCreate, ClientUpdate, ClientResponse
from . import service

router = APIRouter(prefix="/api/clients", tags=["Clients"])


@router.get("", response_model=List[ClientResponse])
def list_clients(db: Session = Depends(get_db)):
    return service.list_clients(db)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(client_id: int, db: Session = Depends(get_db)):
    return service.get_client(db, client_id)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(payload: ClientCreate, db: Session = Depends(get_db)):
    return service.create_client(db, payload)


@router.put("/{client_id}", response_model=ClientResponse)
def update_client(client_id: int, payload: ClientUpdate, db: Session = Depends(get_db)):
    return service.update_client(db, client_id, payload)


@router.delete("/{client_id}", response_model=MessageResponse)
def delete_client(client_id: int, db: Session = Depends(get_db)):
    service.delete_client(db, client_id)
    return {"success": True, "message": "Client deleted"}
