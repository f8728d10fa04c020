"""
Join request endpoints
======================

POST  /api/v1/rides/{ride_id}/requests              -- ask to join an active ride
GET   /api/v1/rides/{ride_id}/requests              -- creator lists requests
PATCH /api/v1/rides/{ride_id}/requests/{request_id} -- creator accepts / rejects

Decisions run under a per-request Redis lock; a second decision arriving
while the first holds the lock gets 409 instead of racing it. Ownership is
checked before the lock, so non-creators are refused without taking it.
"""

import logging

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, HTTPException, Request

from campusride.api.dependencies import get_current_user, get_request_workflow
from campusride.api.middleware import limiter
from campusride.api.schemas import (
    ErrorResponse,
    RequestDecision,
    RideRequestResponse,
)
from campusride.config import settings
from campusride.domain.requests import RequestWorkflow
from campusride.infrastructure.locks import DistributedLock, LockNotAcquired
from campusride.infrastructure.models import UserModel
from campusride.infrastructure.redis_client import get_redis

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rides/{ride_id}/requests", tags=["requests"])


@router.post(
    "",
    status_code=201,
    response_model=RideRequestResponse,
    summary="Request to join a ride",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def create_request(
    request: Request,
    ride_id: int,
    user: UserModel = Depends(get_current_user),
    workflow: RequestWorkflow = Depends(get_request_workflow),
):
    return await workflow.create_request(ride_id, user.id)


@router.get(
    "",
    response_model=list[RideRequestResponse],
    summary="List join requests for a ride (creator only)",
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def list_requests(
    request: Request,
    ride_id: int,
    user: UserModel = Depends(get_current_user),
    workflow: RequestWorkflow = Depends(get_request_workflow),
):
    return await workflow.list_requests_for_ride(ride_id, user.id)


@router.patch(
    "/{request_id}",
    response_model=RideRequestResponse,
    summary="Accept or reject a join request (creator only)",
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
@limiter.limit(settings.rate_limit)
async def decide_request(
    request: Request,
    ride_id: int,
    request_id: int,
    body: RequestDecision,
    user: UserModel = Depends(get_current_user),
    workflow: RequestWorkflow = Depends(get_request_workflow),
    redis: aioredis.Redis = Depends(get_redis),
):
    await workflow.authorize_decision(ride_id, user.id, body.status)
    lock = DistributedLock.for_ride_request(
        redis, request_id, ttl_seconds=settings.decision_lock_ttl_seconds
    )
    try:
        async with lock:
            return await workflow.decide_request(
                ride_id, request_id, user.id, body.status
            )
    except LockNotAcquired:
        logger.warning("Decision on request %s already in progress", request_id)
        raise HTTPException(
            status_code=409,
            detail="Another decision on this request is in progress",
        ) from None
