"""
Authentication Schemas - login request and response.
"""
from pydantic import BaseModel, EmailStr, Field

class LoginRequest(BaseModel):
    """
    Login Schema - Used for authentication
    
    Fields:
    - email: Account email (matched case-insensitively)
    - password: Plain text password
    """
    email: EmailStr
    password: str = Field(..., min_length=1)

class TokenResponse(BaseModel):
    """
    Login Response Schema - Returned after successful authentication
    
    Fields:
    - token: Signed session token, valid for the configured window
    """
    token: str
