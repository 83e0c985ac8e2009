"""Auth routes: signup, login, profile. Bearer JWT auth."""
from __future__ import annotations

import logging
import re
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_, select

from luno.core.config import get_settings
from luno.core.security import create_access_token, hash_password, verify_password
from luno.models.user import User
from luno.routers.deps import DbSession, get_current_user
from luno.schemas.auth import (
    AuthOutSchema,
    LoginSchema,
    ProfileOutSchema,
    ProfileUserSchema,
    SignupSchema,
    UserOutSchema,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])
settings = get_settings()
log = logging.getLogger(__name__)

# Simple, practical email check
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


@router.post("/signup", response_model=AuthOutSchema, status_code=201)
async def signup(body: SignupSchema, db: DbSession):
    """Create a user and return a token for it."""
    username = (body.username or "").strip()
    email = _normalize_email(body.email)
    password = body.password or ""

    if not username or not email or not password:
        raise HTTPException(status_code=400, detail="All fields are required")

    if not EMAIL_RE.match(email):
        raise HTTPException(status_code=400, detail="Invalid email address")

    if len(password) < settings.password_min_length:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {settings.password_min_length} characters",
        )

    # bcrypt hard limit: 72 bytes (UTF-8)
    if len(password.encode("utf-8")) > 72:
        raise HTTPException(status_code=400, detail="Password is too long")

    result = await db.execute(
        select(User.id).where(or_(User.email == email, User.username == username))
    )
    if result.first() is not None:
        raise HTTPException(status_code=400, detail="User already exists with this email or username")

    user = User(username=username, email=email, password_hash=hash_password(password))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    log.info("User %s signed up", user.id)

    return AuthOutSchema(
        message="User created successfully",
        token=create_access_token(user.id),
        user=UserOutSchema.model_validate(user),
    )


@router.post("/login", response_model=AuthOutSchema)
async def login(body: LoginSchema, db: DbSession):
    email = _normalize_email(body.email)
    if not email or not body.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if not user or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return AuthOutSchema(
        message="Login successful",
        token=create_access_token(user.id),
        user=UserOutSchema.model_validate(user),
    )


@router.get("/profile", response_model=ProfileOutSchema)
async def profile(current_user: Annotated[User, Depends(get_current_user)]):
    return ProfileOutSchema(user=ProfileUserSchema.model_validate(current_user))
