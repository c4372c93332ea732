"""
Procedure Router - CRUD endpoints for the procedure catalogue.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..auth.schemas import MessageResponse
from .schemas import ProcedureCreate, ProcedureUpdate, ProcedureResponse
from . import service

router = APIRouter(prefix="/api/procedures", tags=["Procedures"])


@router.get("", response_model=List[ProcedureResponse])
def list_procedures(db: Session = Depends(get_db)):
    return service.list_procedures(db)


@router.get("/{procedure_id}", response_model=ProcedureResponse)
def get_procedure(procedure_id: int, db: Session = Depends(get_db)):
    return service.get_procedure(db, procedure_id)


@router.post("", response_model=ProcedureResponse, status_code=status.HTTP_201_CREATED)
def create_procedure(payload: ProcedureCreate, db: Session = Depends(get_db)):
    return service.create_procedure(db, payload)


@router.put("/{procedure_id}", response_model=ProcedureResponse)
def update_procedure(procedure_id: int, payload: ProcedureUpdate, db: Session = Depends(get_db)):
    return service.update_procedure(db, procedure_id, payload)


@router.delete("/{procedure_id}", response_model=MessageResponse)
def delete_procedure(procedure_id: int, db: Session = Depends(get_db)):
    service.delete_procedure(db, procedure_id)
    return {"success": True, "message": "Procedure deleted"}
