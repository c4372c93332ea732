"""
Appointment Model - A client booked for a procedure at a given time.
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
import enum
from ..database import Base


class AppointmentStatus(str, enum.Enum):
    """Enum for appointment status"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Appointment(Base):
    """
    Appointment Model

    Fields:
    - id: Primary key
    - client_id: Foreign key to Client (NULL once the client is deleted)
    - procedure_id: Foreign key to Procedure (NULL once the procedure is deleted)
    - time: Start of the appointment
    - price: Agreed price at booking time
    - status: pending, confirmed, completed or cancelled
    - final_price: What was actually charged (set on completion)
    - notes: Free text
    - created_at / updated_at: Lifecycle timestamps
    """
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True)
    procedure_id = Column(Integer, ForeignKey("procedures.id", ondelete="SET NULL"), nullable=True, index=True)
    time = Column(DateTime, nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(AppointmentStatus, values_callable=lambda e: [m.value for m in e], name="appointment_status"),
        nullable=False,
        default=AppointmentStatus.PENDING,
    )
    final_price = Column(Numeric(10, 2), nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    client = relationship("Client", back_populates="appointments")
    procedure = relationship("Procedure", back_populates="appointments")

    def __repr__(self):
        return f"<Appointment(id={self.id}, client_id={self.client_id}, procedure_id={self.procedure_id}, time='{self.time}')>"
