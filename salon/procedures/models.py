"""
Procedure Model - Services offered by the salon.
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base


class Procedure(Base):
    """
    Procedure Model

    Fields:
    - id: Primary key
    - name: Procedure name
    - price: List price
    - time_to_complete: Duration in minutes
    - created_at / updated_at: Lifecycle timestamps
    """
    __tablename__ = "procedures"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    time_to_complete = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    # Deleting a procedure keeps its appointments; their procedure_id becomes NULL
    appointments = relationship("Appointment", back_populates="procedure")

    def __repr__(self):
        return f"<Procedure(id={self.id}, name='{self.name}', price={self.price})>"
