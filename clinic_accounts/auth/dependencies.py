"""
Access control gate - FastAPI dependencies for authentication and authorization.

authenticate: bearer token -> verified claims -> live account -> Principal
require_roles: Principal -> role membership check

Handlers receive the Principal as an explicit argument; only the account's id
and role travel downstream, never the profile or credential.
"""
from dataclasses import dataclass
from typing import Iterable, Optional
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..accounts.directory import AccountDirectory, get_account_directory
from ..accounts.models import AccountRole
from ..core.security import TokenCodec, get_token_codec
from ..exceptions import ValidationException
from .exceptions import MissingTokenException, InvalidTokenException, RoleDeniedException

# Set up logging
logger = logging.getLogger(__name__)

# Bearer scheme; missing headers are handled below so the 401 body matches the rest of the API
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Resolved identity of the caller."""
    id: str
    role: AccountRole


def authenticate(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    codec: TokenCodec = Depends(get_token_codec),
    directory: AccountDirectory = Depends(get_account_directory),
) -> Principal:
    """
    Resolve the caller from the Authorization header.

    Raises:
        MissingTokenException: No bearer token (401)
        InvalidTokenException: Token invalid/expired, or its account no longer exists (403)
        TokenConfigurationException: Signing secret not configured (500)
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenException()

    claims = codec.verify(credentials.credentials)
    if claims is None:
        raise InvalidTokenException()

    try:
        account = directory.find_by_id(claims.subject_id)
    except ValidationException:
        logger.warning("Token subject is not a well-formed account id")
        raise InvalidTokenException()

    if account is None:
        logger.warning(f"Token presented for missing account {claims.subject_id}")
        raise InvalidTokenException("Forbidden - Invalid user session")

    return Principal(id=account.id, role=account.role)


def authorize(principal: Principal, allowed_roles: Iterable[AccountRole]) -> Principal:
    """
    Check role membership. Pure; no store access.

    Raises:
        RoleDeniedException: If the principal's role is not allowed
    """
    allowed = set(allowed_roles)
    if principal.role not in allowed:
        logger.warning(
            f"Account {principal.id} with role {principal.role.value} denied; "
            f"required one of {sorted(role.value for role in allowed)}"
        )
        raise RoleDeniedException()
    return principal


def require_roles(*allowed_roles: AccountRole):
    """
    Dependency factory to require specific roles.
    
    Args:
        allowed_roles: Roles that are allowed access
        
    Returns:
        Dependency returning the authorized Principal
    """
    def role_checker(principal: Principal = Depends(authenticate)) -> Principal:
        return authorize(principal, allowed_roles)
    return role_checker


# Convenience dependencies for the role sets used by the routers
require_super_admin = require_roles(AccountRole.SUPER_ADMIN)
require_admin = require_roles(AccountRole.ADMIN, AccountRole.SUPER_ADMIN)
require_doctor = require_roles(AccountRole.DOCTOR)
require_doctor_or_admin = require_roles(AccountRole.DOCTOR, AccountRole.ADMIN, AccountRole.SUPER_ADMIN)
require_any_role = require_roles(*AccountRole)
