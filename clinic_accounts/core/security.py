"""
Core security utilities for authentication and password handling.

Two leaf components live here:
- the credential verifier (salted bcrypt hashing via passlib)
- the session token codec (signed, time-limited JWTs via python-jose)
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from passlib.exc import PasswordValueError
import logging

from ..config import settings
from ..accounts.models import AccountRole
from ..auth.exceptions import TokenConfigurationException
from ..exceptions import ValidationException

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    A fresh salt is generated on every call, so two hashes of the same
    plaintext differ.
    
    Args:
        password: Plain text password
        
    Returns:
        str: Hashed password

    Raises:
        ValidationException: If the backend rejects the password (NUL bytes, oversize)
    """
    try:
        return pwd_context.hash(password)
    except PasswordValueError as e:
        logger.info(f"Password rejected by hash backend: {str(e)}")
        raise ValidationException("Invalid password")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.
    
    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against
        
    Returns:
        bool: True if password matches hash
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Stored value is not a recognisable hash
        logger.warning("Stored credential could not be parsed as a password hash")
        return False

def dummy_verify() -> None:
    """
    Spend the same CPU as a real verification.

    Used on login for unknown emails so both failure causes take comparable time.
    """
    pwd_context.dummy_verify()


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified session token."""
    subject_id: str
    role: AccountRole
    issued_at: datetime
    expires_at: datetime


class TokenCodec:
    """
    Issues and verifies signed bearer tokens.

    The codec is stateless: nothing is stored server-side, and expiry is the
    only way a token stops being valid.

    Args:
        secret_key: Signing secret. When empty, every operation fails closed
            with TokenConfigurationException.
        algorithm: JWT signing algorithm
        expire_minutes: Validity window for issued tokens
    """

    def __init__(self, secret_key: Optional[str], algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def _require_secret(self) -> str:
        if not self.secret_key:
            logger.critical("SECRET_KEY is not configured; refusing to issue or verify tokens")
            raise TokenConfigurationException()
        return self.secret_key

    def issue(self, subject_id: str, role: AccountRole, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a signed token for an account.

        Args:
            subject_id: Account id
            role: Account role at login time
            expires_delta: Override of the default validity window

        Returns:
            str: Encoded JWT
        """
        secret = self._require_secret()
        issued_at = datetime.now(timezone.utc)
        expire = issued_at + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))
        payload = {
            "sub": str(subject_id),
            "role": AccountRole(role).value,
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[TokenClaims]:
        """
        Verify and decode a token.

        Args:
            token: Encoded JWT

        Returns:
            TokenClaims if the token is well-formed, correctly signed and
            unexpired; None otherwise.
        """
        secret = self._require_secret()
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.info("Rejected expired token")
            return None
        except JWTError as e:
            logger.info(f"Rejected invalid token: {str(e)}")
            return None

        subject_id = payload.get("sub")
        role = payload.get("role")
        if not subject_id or role not in AccountRole.__members__ or "exp" not in payload:
            logger.info("Rejected token with incomplete claims")
            return None

        return TokenClaims(
            subject_id=subject_id,
            role=AccountRole(role),
            issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


def get_token_codec() -> TokenCodec:
    """
    Token codec dependency, built from the current settings.

    Returns:
        TokenCodec: Codec configured with the process-wide secret
    """
    return TokenCodec(
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )
