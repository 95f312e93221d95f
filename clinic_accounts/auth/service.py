"""
Authentication service layer for business logic.
"""
import logging

from ..accounts.directory import AccountDirectory
from ..core.security import TokenCodec, verify_password, dummy_verify
from .exceptions import InvalidCredentialsException

# Set up logging
logger = logging.getLogger(__name__)

def login_user(directory: AccountDirectory, codec: TokenCodec, email: str, password: str) -> str:
    """
    Authenticate an account and issue a session token.

    An unknown email and a wrong password produce the same exception with the
    same message, and both run a full hash verification.
    
    Args:
        directory: Account directory
        codec: Session token codec
        email: Email address (any casing)
        password: Plain text password
        
    Returns:
        str: Signed session token
        
    Raises:
        InvalidCredentialsException: If credentials are invalid
    """
    account = directory.find_by_email(email)
    if account is None:
        dummy_verify()
        logger.info(f"Login failed for {email.lower()}: unknown email")
        raise InvalidCredentialsException()

    if not verify_password(password, account.password_hash):
        logger.info(f"Login failed for {account.email}: credential mismatch")
        raise InvalidCredentialsException()

    token = codec.issue(account.id, account.role)
    logger.info(f"Login succeeded for account {account.id} ({account.role.value})")
    return token
