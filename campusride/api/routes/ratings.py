"""
Rating endpoints
================

POST /api/v1/rides/{ride_id}/ratings -- rate a completed ride
GET  /api/v1/rides/{ride_id}/ratings -- ratings left on a ride
"""

from fastapi import APIRouter, Depends, Request

from campusride.api.dependencies import get_current_user, get_rating_gate
from campusride.api.middleware import limiter
from campusride.api.schemas import (
    ErrorResponse,
    RatingCreateRequest,
    RideRatingResponse,
)
from campusride.config import settings
from campusride.domain.ratings import RatingGate
from campusride.infrastructure.models import UserModel

router = APIRouter(prefix="/rides/{ride_id}/ratings", tags=["ratings"])


@router.post(
    "",
    status_code=201,
    response_model=RideRatingResponse,
    summary="Rate a completed ride",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def submit_rating(
    request: Request,
    ride_id: int,
    body: RatingCreateRequest,
    user: UserModel = Depends(get_current_user),
    gate: RatingGate = Depends(get_rating_gate),
):
    return await gate.submit_rating(ride_id, user.id, body.rating, body.review)


@router.get(
    "",
    response_model=list[RideRatingResponse],
    summary="List ratings for a ride",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def list_ratings(
    request: Request,
    ride_id: int,
    user: UserModel = Depends(get_current_user),
    gate: RatingGate = Depends(get_rating_gate),
):
    return await gate.list_ratings(ride_id)
