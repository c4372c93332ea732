"""
Client Model - Stores the salon's customers.
"""
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base


class Client(Base):
    """
    Client Model

    Fields:
    - id: Primary key
    - name: First name
    - sur_name: Last name
    - phone_num: Contact phone number
    - instagram: Instagram handle (optional)
    - trust_rating: 1 (unreliable) to 5 (reliable), defaults to 5
    - created_at / updated_at: Lifecycle timestamps
    """
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    sur_name = Column(String, nullable=False)
    phone_num = Column(String, nullable=False)
    instagram = Column(String, nullable=True)
    trust_rating = Column(Integer, nullable=False, default=5)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    # Deleting a client keeps its appointments; their client_id becomes NULL
    appointments = relationship("Appointment", back_populates="client")

    def __repr__(self):
        return f"<Client(id={self.id}, name='{self.name} {self.sur_name}')>"
