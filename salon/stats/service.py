"""
Stats Service - Aggregate figures over clients, procedures and appointments.
"""
from typing import Any, Dict
from sqlalchemy import func
from sqlalchemy.orm import Session
import logging

from ..appointments.models import Appointment, AppointmentStatus
from ..clients.models import Client
from ..procedures.models import Procedure

# Set up logging
logger = logging.getLogger(__name__)


def get_overview(db: Session) -> Dict[str, Any]:
    """
    Build the overview report.

    Revenue counts completed appointments only, using the final price and
    falling back to the booked price where no final price was recorded.

    Args:
        db: Database session

    Returns:
        dict: Totals, appointment counts by status and revenue
    """
    logger.info("Fetching overall statistics")

    total_clients = db.query(func.count(Client.id)).scalar() or 0
    total_procedures = db.query(func.count(Procedure.id)).scalar() or 0

    by_status = dict(
        db.query(Appointment.status, func.count(Appointment.id))
        .group_by(Appointment.status)
        .all()
    )
    counts = {s.value: by_status.get(s, 0) for s in AppointmentStatus}
    counts["total"] = sum(by_status.values())

    revenue_total = (
        db.query(func.coalesce(func.sum(func.coalesce(Appointment.final_price, Appointment.price)), 0))
        .filter(Appointment.status == AppointmentStatus.COMPLETED)
        .scalar()
    )
    revenue_total = float(revenue_total or 0)
    completed = counts[AppointmentStatus.COMPLETED.value]

    return {
        "total_clients": total_clients,
        "total_procedures": total_procedures,
        "appointments": counts,
        "revenue": {
            "total": revenue_total,
            "average": revenue_total / (completed or 1),
        },
    }
