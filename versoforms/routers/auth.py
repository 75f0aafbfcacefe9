from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
import logging
import uuid

from ..models.user import UserPublic
from ..services.auth import create_tokens, verify_token, subject_of, get_current_user_id, is_admin
from ..services.backend import BackendClient, BackendError, get_backend

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"]
)


class LoginRequest(BaseModel):
    email: str
    password: str

class LoginResponse(BaseModel):
    user: UserPublic
    is_admin: bool
    access_token: str
    refresh_token: str

@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, backend: BackendClient = Depends(get_backend)):
    try:
        user = backend.authenticate(request.email, request.password)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid login credentials"
            )
        admin = is_admin(backend, user.id)
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    return {
        "user": UserPublic.model_validate(user),
        "is_admin": admin,
        **create_tokens(user.id)
    }


@router.post("/logout")
async def logout(current_user_id: uuid.UUID = Depends(get_current_user_id)):
    # Tokens are stateless; the client discards them
    logger.info("User %s signed out", current_user_id)
    return {"message": "Logged out successfully"}


class RefreshTokenRequest(BaseModel):
    refresh_token: str

class RefreshTokenResponse(BaseModel):
    access_token: str
    refresh_token: str

@router.post("/refresh", response_model=RefreshTokenResponse)
def refresh_token(request: RefreshTokenRequest, backend: BackendClient = Depends(get_backend)):
    payload = verify_token(request.refresh_token)
    if payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token"
        )

    user_id = subject_of(payload)
    try:
        user = backend.get_user(user_id)
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    # Generate new tokens
    return create_tokens(user.id)
