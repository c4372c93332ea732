"""
Bootstrap utilities for first admin creation.
Creates the administrator account from environment variables when none exists.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..config import settings
from .models import UserRole
from .service import get_credential_store

logger = logging.getLogger(__name__)


def bootstrap_admin_if_needed(
    db: Session,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> bool:
    """
    Check if an admin exists and create the bootstrap admin if needed.
    This function should be called during application startup.

    Args:
        db: Database session
        username: Admin username (defaults to ADMIN_USERNAME)
        password: Admin password (defaults to ADMIN_INITIAL_PASSWORD)

    Returns:
        bool: True if an admin was created
    """
    store = get_credential_store(db)
    username = username or settings.admin_username
    password = password if password is not None else settings.admin_initial_password

    if store.admin_exists():
        logger.info("Admin user found. Bootstrap not needed.")
        return False

    if not password:
        logger.error("ADMIN_INITIAL_PASSWORD is not set. Cannot create default admin.")
        return False

    if store.get_by_username(username):
        logger.warning(f"Bootstrap failed: username {username} already exists")
        return False

    store.create_user(username, password, UserRole.ADMIN)
    logger.info(f"Admin user '{username}' created successfully")
    return True
