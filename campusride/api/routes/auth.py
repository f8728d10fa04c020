"""
Auth endpoints
==============

POST /api/v1/auth/register -- create an account
POST /api/v1/auth/login    -- exchange credentials for a bearer token
GET  /api/v1/auth/me       -- the calling user
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from campusride.api.dependencies import get_current_user, get_db
from campusride.api.middleware import limiter
from campusride.api.schemas import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from campusride.config import settings
from campusride.domain.errors import ValidationError
from campusride.infrastructure.models import UserModel
from campusride.infrastructure.repositories import UserRepository
from campusride.infrastructure.security import (
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=UserResponse,
    summary="Register a new user",
)
@limiter.limit(settings.rate_limit)
async def register(
    request: Request,
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    repo = UserRepository(db)
    if await repo.get_by_username(body.username):
        raise ValidationError("Username already taken", code="username_taken")

    user = await repo.create(
        username=body.username,
        password_hash=hash_password(body.password),
        full_name=body.full_name,
    )
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


@router.post("/login", response_model=TokenResponse, summary="Log in")
@limiter.limit(settings.rate_limit)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    user = await UserRepository(db).get_by_username(body.username)
    if not user or not verify_password(body.password, user.password_hash):
        raise HTTPException(
            status_code=401,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(
        access_token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse, summary="Current user")
async def me(user: UserModel = Depends(get_current_user)):
    return user
