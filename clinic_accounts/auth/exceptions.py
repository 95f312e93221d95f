"""
Authentication-specific exceptions.

Messages are generic: callers learn that a request was rejected,
never why a token or credential failed.
"""
from ..exceptions import AuthenticationException, AuthorizationException, InternalServerException

class MissingTokenException(AuthenticationException):
    """Exception raised when no bearer token is supplied."""
    def __init__(self, detail: str = "Unauthorized - Token required"):
        super().__init__(detail=detail)

class InvalidCredentialsException(AuthenticationException):
    """Exception raised for an unknown email or a wrong password alike."""
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail=detail)

class InvalidTokenException(AuthorizationException):
    """Exception raised when a token is malformed, badly signed, expired, or names a deleted account."""
    def __init__(self, detail: str = "Forbidden - Invalid or expired token"):
        super().__init__(detail=detail)

class RoleDeniedException(AuthorizationException):
    """Exception raised when the authenticated role is not allowed on an endpoint."""
    def __init__(self, detail: str = "Forbidden - Insufficient permissions"):
        super().__init__(detail=detail)

class TokenConfigurationException(InternalServerException):
    """Exception raised when the token signing secret is not configured."""
    def __init__(self, detail: str = "Internal server configuration error"):
        super().__init__(detail=detail)
