"""
Ride endpoints
==============

GET   /api/v1/rides                  -- list rides (optional source / destination filter)
POST  /api/v1/rides                  -- offer a ride (caller becomes creator)
GET   /api/v1/rides/{ride_id}        -- one ride
PATCH /api/v1/rides/{ride_id}/status -- creator advances pending -> active -> completed
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from campusride.api.dependencies import get_current_user, get_lifecycle
from campusride.api.middleware import limiter
from campusride.api.schemas import (
    ErrorResponse,
    RideCreateRequest,
    RideResponse,
    RideStatusUpdate,
)
from campusride.config import settings
from campusride.domain.lifecycle import RideLifecycleManager
from campusride.infrastructure.models import UserModel

router = APIRouter(prefix="/rides", tags=["rides"])


@router.get(
    "",
    response_model=list[RideResponse],
    summary="List rides",
    description=(
        "Returns every ride in any status.  ``source`` and ``destination`` "
        "narrow the list by case-insensitive substring match."
    ),
)
@limiter.limit(settings.rate_limit)
async def list_rides(
    request: Request,
    source: Optional[str] = Query(None),
    destination: Optional[str] = Query(None),
    user: UserModel = Depends(get_current_user),
    lifecycle: RideLifecycleManager = Depends(get_lifecycle),
):
    return await lifecycle.list_rides(source=source, destination=destination)


@router.post(
    "",
    status_code=201,
    response_model=RideResponse,
    summary="Create a ride",
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def create_ride(
    request: Request,
    body: RideCreateRequest,
    user: UserModel = Depends(get_current_user),
    lifecycle: RideLifecycleManager = Depends(get_lifecycle),
):
    return await lifecycle.create_ride(user.id, body.model_dump())


@router.get(
    "/{ride_id}",
    response_model=RideResponse,
    summary="Get a ride",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def get_ride(
    request: Request,
    ride_id: int,
    user: UserModel = Depends(get_current_user),
    lifecycle: RideLifecycleManager = Depends(get_lifecycle),
):
    return await lifecycle.get_ride(ride_id)


@router.patch(
    "/{ride_id}/status",
    response_model=RideResponse,
    summary="Advance a ride's status",
    description="Creator only.  Legal moves: pending -> active, active -> completed.",
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
@limiter.limit(settings.rate_limit)
async def advance_ride_status(
    request: Request,
    ride_id: int,
    body: RideStatusUpdate,
    user: UserModel = Depends(get_current_user),
    lifecycle: RideLifecycleManager = Depends(get_lifecycle),
):
    return await lifecycle.advance_status(ride_id, user.id, body.status)
