"""
Bootstrap utilities for first super admin creation.

No endpoint creates SUPER_ADMIN accounts; the first one is created at startup
from environment variables.
"""
import logging
from sqlalchemy.orm import Session

from ..accounts.directory import AccountDirectory
from ..accounts.models import Account, AccountRole
from ..config import settings
from ..exceptions import AppException

logger = logging.getLogger(__name__)

def super_admin_exists(db: Session) -> bool:
    """
    Check if any super admin exists in the database.
    
    Args:
        db: Database session
        
    Returns:
        bool: True if at least one super admin exists, False otherwise
    """
    return db.query(Account).filter(Account.role == AccountRole.SUPER_ADMIN).count() > 0

def bootstrap_super_admin_if_needed(db: Session, email: str = None, password: str = None) -> bool:
    """
    Create the first super admin when none exists.

    Args:
        db: Database session
        email: Override of BOOTSTRAP_SUPER_ADMIN_EMAIL
        password: Override of BOOTSTRAP_SUPER_ADMIN_PASSWORD

    Returns:
        bool: True if a super admin was created, False otherwise
    """
    email = email or settings.bootstrap_super_admin_email
    password = password or settings.bootstrap_super_admin_password

    if super_admin_exists(db):
        logger.info("Super admin already exists, skipping bootstrap")
        return False

    if not email or not password:
        logger.warning("No super admin exists and bootstrap credentials are not configured")
        return False

    try:
        account = AccountDirectory(db).create(
            email,
            password,
            AccountRole.SUPER_ADMIN,
            {"first_name": "System", "last_name": "Administrator"},
        )
    except AppException as e:
        logger.error(f"Bootstrap super admin creation failed: {e.detail}")
        return False

    logger.info(f"Bootstrap super admin created: {account.id}")
    return True
