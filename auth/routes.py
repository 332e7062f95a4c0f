"""
Auth API routes — register, login, me.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import app_settings
from auth.dependencies import get_current_claims
from auth.jwt import create_token
from auth.password import dummy_hash, hash_password, verify_password
from config.settings import Settings
from database.helpers import DuplicateEmailError, create_user, find_user_by_email
from database.session import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: str
    email: str


class TokenResponse(BaseModel):
    token: str


def _email_conflict() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Email exists",
    )


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=UserResponse)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(app_settings),
) -> Dict[str, Any]:
    """Register a new user."""
    if await find_user_by_email(session, req.email) is not None:
        raise _email_conflict()

    password_hash = await run_in_threadpool(
        hash_password, req.password, settings.bcrypt_rounds
    )
    try:
        user = await create_user(session, req.email, password_hash)
    except DuplicateEmailError:
        raise _email_conflict()
    await session.commit()

    logger.info("Registered user %s", user.id)
    return {"id": str(user.id), "email": user.email}


@router.post("/login", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(app_settings),
) -> Dict[str, Any]:
    """Login with email + password."""
    user = await find_user_by_email(session, req.email)

    # Unknown emails still pay for a bcrypt check; same response either way.
    if user is not None:
        digest = user.password_hash
    else:
        digest = await run_in_threadpool(dummy_hash, settings.bcrypt_rounds)
    password_ok = await run_in_threadpool(verify_password, req.password, digest)
    if user is None or not password_ok:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token = create_token(str(user.id), user.email, settings.jwt_secret)
    logger.info("Login: %s", user.id)
    return {"token": token}


@router.get("/me", response_model=UserResponse)
async def me(claims: Dict[str, Any] = Depends(get_current_claims)) -> Dict[str, Any]:
    """Identity carried by the presented bearer token."""
    return {"id": claims["sub"], "email": claims.get("email", "")}
