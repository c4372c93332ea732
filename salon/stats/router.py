"""
Stats Router - Read-only reporting endpoints, served through the response cache.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import StatsOverview
from . import service

router = APIRouter(prefix="/api/stats", tags=["Stats"])


@router.get("", response_model=StatsOverview)
def get_overview(db: Session = Depends(get_db)):
    return service.get_overview(db)
