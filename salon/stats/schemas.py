"""
Stats Schemas - Shape of the overview report.
"""
from pydantic import BaseModel


class AppointmentCounts(BaseModel):
    total: int
    pending: int
    confirmed: int
    completed: int
    cancelled: int


class RevenueSummary(BaseModel):
    total: float
    average: float


class StatsOverview(BaseModel):
    total_clients: int
    total_procedures: int
    appointments: AppointmentCounts
    revenue: RevenueSummary
