"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictInt

from campusride.domain.enums import RequestStatus, RideStatus


# ── Requests ──────────────────────────────────────────────────────────


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=120)


class LoginRequest(BaseModel):
    username: str
    password: str


class RideCreateRequest(BaseModel):
    # Strict ints: JSON booleans and numeric strings are rejected rather
    # than coerced. Range checks happen in the lifecycle manager so they
    # surface as domain validation errors with a precise message.
    source: str
    destination: str
    departure_time: datetime
    available_seats: StrictInt
    cost_per_seat: StrictInt


class RideStatusUpdate(BaseModel):
    status: str = Field(..., description="Target status: active or completed.")


class RequestDecision(BaseModel):
    status: str = Field(..., description="Decision: accepted or rejected.")


class RatingCreateRequest(BaseModel):
    rating: StrictInt
    review: Optional[str] = None


# ── Responses ─────────────────────────────────────────────────────────


class UserResponse(BaseModel):
    id: int
    username: str
    full_name: str

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class RideResponse(BaseModel):
    id: int
    creator_id: int
    source: str
    destination: str
    departure_time: datetime
    available_seats: int
    cost_per_seat: int
    status: RideStatus
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RideRequestResponse(BaseModel):
    id: int
    ride_id: int
    user_id: int
    status: RequestStatus
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RideRatingResponse(BaseModel):
    id: int
    ride_id: int
    user_id: int
    rating: int
    review: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
    code: Optional[str] = None
