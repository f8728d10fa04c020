"""
Ride Lifecycle Manager
======================

Owns ride creation and the creator-driven status machine::

    pending ──start──▶ active ──finish──▶ completed

Only the creator may move a ride forward; anything lateral, backward or
skipping a step raises ``InvalidTransitionError``.  The status write is a
compare-and-set on the status we just read, so two concurrent advances
cannot both succeed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from .entities import Ride
from .enums import RideStatus
from .errors import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from .store import RideStore

logger = logging.getLogger(__name__)

RIDE_ATTRIBUTES = (
    "source",
    "destination",
    "departure_time",
    "available_seats",
    "cost_per_seat",
)


# ── Attribute validation ──────────────────────────────────────────────


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{name} must be a positive integer")
    return value


def _non_blank(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string")
    return value.strip()


def _instant(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
    raise ValidationError("departure_time must be a valid timestamp")


def validate_ride_attributes(attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Return cleaned ride attributes or raise ``ValidationError``."""
    missing = [name for name in RIDE_ATTRIBUTES if attributes.get(name) is None]
    if missing:
        raise ValidationError(f"Missing ride attributes: {', '.join(missing)}")

    return {
        "source": _non_blank("source", attributes["source"]),
        "destination": _non_blank("destination", attributes["destination"]),
        "departure_time": _instant(attributes["departure_time"]),
        "available_seats": _positive_int(
            "available_seats", attributes["available_seats"]
        ),
        "cost_per_seat": _positive_int("cost_per_seat", attributes["cost_per_seat"]),
    }


def filter_rides(
    rides: Iterable[Ride],
    source: Optional[str] = None,
    destination: Optional[str] = None,
) -> list[Ride]:
    """Case-insensitive substring match on source / destination."""
    src = (source or "").strip().lower()
    dst = (destination or "").strip().lower()
    return [
        r
        for r in rides
        if src in r.source.lower() and dst in r.destination.lower()
    ]


# ── Service ───────────────────────────────────────────────────────────


class RideLifecycleManager:
    def __init__(
        self,
        store: RideStore,
        initial_status: RideStatus = RideStatus.PENDING,
    ):
        if initial_status == RideStatus.COMPLETED:
            raise ValueError("Rides cannot start out completed")
        self.store = store
        self.initial_status = RideStatus(initial_status)

    async def create_ride(
        self, creator_id: int, attributes: Mapping[str, Any]
    ) -> Ride:
        cleaned = validate_ride_attributes(attributes)
        ride = await self.store.create_ride(
            Ride(creator_id=creator_id, status=self.initial_status, **cleaned)
        )
        logger.info(
            "Ride %s created by user %s (%s -> %s, status=%s)",
            ride.id,
            creator_id,
            ride.source,
            ride.destination,
            ride.status.value,
        )
        return ride

    async def list_rides(
        self,
        source: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> list[Ride]:
        rides = await self.store.get_all_rides()
        if source or destination:
            return filter_rides(rides, source, destination)
        return rides

    async def get_ride(self, ride_id: int) -> Ride:
        ride = await self.store.get_ride(ride_id)
        if ride is None:
            raise NotFoundError(f"Ride {ride_id} not found", code="ride_not_found")
        return ride

    async def advance_status(
        self, ride_id: int, requested_by: int, target_status: RideStatus
    ) -> Ride:
        ride = await self.get_ride(ride_id)
        if not ride.is_creator(requested_by):
            raise ForbiddenError(
                "Only the ride creator can change its status",
                code="not_ride_creator",
            )

        try:
            target = RideStatus(target_status)
        except ValueError:
            raise InvalidTransitionError(
                f"Unknown ride status: {target_status}"
            ) from None

        current = ride.status
        ride.transition_to(target)

        updated = await self.store.update_ride_status(
            ride_id, target, expected=current
        )
        if updated is None:
            # Someone else moved the ride between our read and write
            raise InvalidTransitionError(
                f"Ride {ride_id} is no longer {current.value}",
                code="stale_ride_status",
            )
        logger.info(
            "Ride %s advanced %s -> %s by user %s",
            ride_id,
            current.value,
            target.value,
            requested_by,
        )
        return updated
