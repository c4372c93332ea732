"""
Schedule Model - Working hours for one day of the week.
"""
from sqlalchemy import Column, Integer, Boolean, DateTime, JSON, CheckConstraint, func
from ..database import Base


class Schedule(Base):
    """
    Schedule Model

    Fields:
    - id: Primary key
    - day_of_week: 0 (Sunday) to 6 (Saturday), one row per day
    - time_table: Up to four booking slots keyed "1".."4", values "HH:MM"
    - is_weekend: Day off flag
    """
    __tablename__ = "schedules"
    __table_args__ = (
        CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_schedules_day_of_week"),
    )

    id = Column(Integer, primary_key=True, index=True)
    day_of_week = Column(Integer, nullable=False, unique=True, index=True)
    time_table = Column(JSON, nullable=False, default=dict)
    is_weekend = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Schedule(id={self.id}, day_of_week={self.day_of_week}, is_weekend={self.is_weekend})>"
