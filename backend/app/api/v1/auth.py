"""
Authentication API endpoints.

Handles registration, login and logout. A successful login both opens a
cookie session and returns a bearer token; logout only clears the cookie
session, already-issued tokens stay valid until they expire.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import SESSION_USER_KEY, get_current_claims, get_session_user
from app.core.errors import AuthenticationError, ValidationError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.session import get_db
from app.models import User
from app.models.user import VALID_ROLES

logger = logging.getLogger("healthinfo.auth")

router = APIRouter()


# ============== Pydantic Schemas ==============


class UserRegister(BaseModel):
    """Schema for user registration. Presence is checked by the endpoint."""

    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None  # 'job_seeker' | 'hr'
    name: Optional[str] = None


class UserLogin(BaseModel):
    username: str = ""
    password: str = ""


class UserResponse(BaseModel):
    """Schema for user response (without password)."""

    id: int
    username: str
    email: str
    role: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


class TokenClaims(BaseModel):
    """Claims carried by a bearer token."""

    id: int
    username: str
    role: str
    iat: Optional[int] = None
    exp: int


# ============== Helper Functions ==============


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Get a user by exact (case-sensitive) username."""
    return db.query(User).filter(User.username == username).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email address."""
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, user_data: UserRegister) -> User:
    """
    Persist a new user with a hashed password.

    Raises ValidationError when a concurrent registration already claimed the
    username or email.
    """
    new_user = User(
        username=user_data.username,
        hashed_password=get_password_hash(user_data.password),
        email=user_data.email,
        role=user_data.role,
        name=user_data.name,
    )

    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Username or email already exists")
    db.refresh(new_user)
    return new_user


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Authenticate a user by username and password."""
    user = get_user_by_username(db, username)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def start_session(request: Request, user: User) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id


# ============== API Endpoints ==============


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, request: Request, db: Session = Depends(get_db)):
    """
    Register a new user.

    Creates the account, opens a cookie session and returns a bearer token.
    """
    fields = user_data.model_dump()
    if not all(fields.values()):
        raise ValidationError("All fields are required")

    if get_user_by_username(db, user_data.username):
        raise ValidationError("Username already exists")

    if get_user_by_email(db, user_data.email):
        raise ValidationError("Email already exists")

    if user_data.role not in VALID_ROLES:
        raise ValidationError("Invalid role")

    new_user = create_user(db, user_data)
    logger.info("Registered user %s (role=%s)", new_user.id, new_user.role)

    start_session(request, new_user)
    return AuthResponse(user=UserResponse.model_validate(new_user), token=create_access_token(new_user))


@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, request: Request, db: Session = Depends(get_db)):
    """Verify credentials, open a cookie session and issue a bearer token."""
    user = authenticate_user(db, credentials.username, credentials.password)

    if not user:
        raise AuthenticationError("Invalid credentials")

    start_session(request, user)
    return AuthResponse(user=UserResponse.model_validate(user), token=create_access_token(user))


@router.post("/logout")
def logout(request: Request):
    """Destroy the cookie session. Bearer tokens are not revoked."""
    request.session.clear()
    return {"message": "Logged out"}


@router.get("/user", response_model=TokenClaims)
def get_me(claims: dict = Depends(get_current_claims)):
    """
    Get the current user as carried by the bearer token.

    Requires a valid JWT in the Authorization header.
    """
    return claims


@router.get("/session", response_model=UserResponse)
def get_session(user: User = Depends(get_session_user)):
    """Get the user bound to the cookie session (legacy login flow)."""
    return user
