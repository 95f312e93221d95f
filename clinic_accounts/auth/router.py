"""
Authentication routes.
"""
from fastapi import APIRouter, Depends

from ..accounts.directory import AccountDirectory, get_account_directory
from ..core.security import TokenCodec, get_token_codec
from .schemas import LoginRequest, TokenResponse
from .service import login_user

# Create API router
router = APIRouter()

@router.post("/login", response_model=TokenResponse, summary="Log in and obtain a session token")
def login(
    credentials: LoginRequest,
    directory: AccountDirectory = Depends(get_account_directory),
    codec: TokenCodec = Depends(get_token_codec),
):
    """
    Exchange email and password for a session token.

    Any failure returns the same 401 response.
    """
    token = login_user(directory, codec, credentials.email, credentials.password)
    return TokenResponse(token=token)
