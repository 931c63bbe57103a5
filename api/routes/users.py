"""User registration and login routes"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_bearer_token, get_current_user_id, get_db
from app.exceptions import UnauthenticatedError
from domain.mappers import UserMapper
from domain.schemas.user_schemas import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
)
from services import AuthService

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("mealledger.api.users")


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    """Create a new account"""
    new_user = AuthService.register(db, user.email, user.password, user.full_name)
    return UserMapper.to_response(new_user)


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token"""
    session = AuthService.login(db, credentials.email, credentials.password)
    return UserMapper.to_token(session)


@router.post("/logout")
def logout(
    token: Optional[str] = Depends(get_bearer_token), db: Session = Depends(get_db)
):
    """End the current session"""
    if not token:
        raise UnauthenticatedError("Not logged in")
    AuthService.logout(db, token)
    return {"status": "ok"}


@router.get("/me", response_model=UserResponse)
def me(user_id: UUID = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Profile of the logged-in user"""
    return UserMapper.to_response(AuthService.get_user(db, user_id))
