"""FastAPI dependency injection helpers."""

from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from campusride.config import settings
from campusride.domain.lifecycle import RideLifecycleManager
from campusride.domain.ratings import RatingGate
from campusride.domain.requests import RequestWorkflow
from campusride.infrastructure.database import async_session_factory
from campusride.infrastructure.models import UserModel
from campusride.infrastructure.repositories import UserRepository
from campusride.infrastructure.security import InvalidToken, decode_access_token
from campusride.infrastructure.sql_store import SqlAlchemyRideStore


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_store(db: AsyncSession = Depends(get_db)) -> SqlAlchemyRideStore:
    return SqlAlchemyRideStore(db)


def get_lifecycle(
    store: SqlAlchemyRideStore = Depends(get_store),
) -> RideLifecycleManager:
    return RideLifecycleManager(store, initial_status=settings.initial_ride_status)


def get_request_workflow(
    store: SqlAlchemyRideStore = Depends(get_store),
) -> RequestWorkflow:
    return RequestWorkflow(store, unique_requests=settings.unique_ride_requests)


def get_rating_gate(store: SqlAlchemyRideStore = Depends(get_store)) -> RatingGate:
    return RatingGate(store, unique_ratings=settings.unique_ride_ratings)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> UserModel:
    """Resolve ``Authorization: Bearer <token>`` to a user, or answer 401."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Authorization token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = decode_access_token(authorization.split(" ", 1)[1])
    except InvalidToken as exc:
        raise HTTPException(
            status_code=401,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Unknown user",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
