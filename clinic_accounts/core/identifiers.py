"""
Account identifier validation.
"""
import uuid

from ..accounts.exceptions import InvalidIdentifierException

def parse_account_id(value, field_name: str = "id") -> str:
    """
    Validate an account identifier before it reaches storage.

    Args:
        value: Raw identifier from a path or body
        field_name: Name used in the error message

    Returns:
        str: Canonical lowercase UUID string

    Raises:
        InvalidIdentifierException: If the value is not a well-formed UUID
    """
    if isinstance(value, uuid.UUID):
        return str(value)
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, TypeError, AttributeError):
        raise InvalidIdentifierException(field_name)
