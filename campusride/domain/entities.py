"""
Domain entities with business logic.

Patterns used
-------------
- **State Pattern** on ``Ride`` and ``RideRequest``: each enforces its own
  lifecycle (PENDING -> ACTIVE -> COMPLETED for rides, PENDING ->
  ACCEPTED | REJECTED for join requests).
- Creator checks live on ``Ride`` so every service asks the same question.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import (
    REQUEST_TRANSITIONS,
    RIDE_TRANSITIONS,
    RequestStatus,
    RideStatus,
)
from .errors import InvalidStateError, InvalidTransitionError


# ── Entities ──────────────────────────────────────────────────────────


@dataclass
class User:
    id: Optional[int] = None
    username: str = ""
    full_name: str = ""


@dataclass
class Ride:
    id: Optional[int] = None
    creator_id: int = 0
    source: str = ""
    destination: str = ""
    departure_time: Optional[datetime] = None
    available_seats: int = 1
    cost_per_seat: int = 0
    status: RideStatus = RideStatus.PENDING
    created_at: Optional[datetime] = None

    def is_creator(self, user_id: int) -> bool:
        return self.creator_id == user_id

    def can_transition_to(self, new_status: RideStatus) -> bool:
        return new_status in RIDE_TRANSITIONS.get(self.status, set())

    def transition_to(self, new_status: RideStatus) -> None:
        """Move to *new_status* if the transition is legal, else raise."""
        if not self.can_transition_to(new_status):
            raise InvalidTransitionError(
                f"Cannot transition ride from {self.status.value} "
                f"to {RideStatus(new_status).value}"
            )
        self.status = new_status


@dataclass
class RideRequest:
    id: Optional[int] = None
    ride_id: int = 0
    user_id: int = 0
    status: RequestStatus = RequestStatus.PENDING
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        """Pending or accepted requests still hold a claim on the ride."""
        return self.status != RequestStatus.REJECTED

    def decide(self, decision: RequestStatus) -> None:
        """Finalize a pending request; decided requests never change again."""
        if decision not in REQUEST_TRANSITIONS.get(self.status, set()):
            raise InvalidStateError(
                f"Request {self.id} is already {self.status.value}",
                code="request_already_decided",
            )
        self.status = decision


@dataclass
class RideRating:
    id: Optional[int] = None
    ride_id: int = 0
    user_id: int = 0
    rating: int = 0
    review: Optional[str] = None
    created_at: Optional[datetime] = None
