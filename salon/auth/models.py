"""
User Model - Stores operator accounts and their lockout state.
"""
from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
import enum
from ..database import Base


class UserRole(str, enum.Enum):
    """
    Enumeration for user roles.

    Roles:
    - ADMIN: Business owner / administrator
    - USER: Standard operator account
    """
    ADMIN = "admin"
    USER = "user"


class User(Base):
    """
    User Model - Credential record

    Fields:
    - id: Primary key for user identification
    - username: Unique login name
    - password_hash: Salted bcrypt hash (never store raw passwords)
    - role: User role (admin, user)
    - login_attempts: Consecutive failed logins in the current streak
    - lock_until: When set and in the future, logins are refused
    - last_login: Timestamp of the last successful login
    - created_at: Timestamp when user was created
    - updated_at: Timestamp when user was last updated
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole, values_callable=lambda e: [m.value for m in e], name="user_role"),
                  default=UserRole.ADMIN, nullable=False)
    login_attempts = Column(Integer, default=0, nullable=False)
    lock_until = Column(DateTime, nullable=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
