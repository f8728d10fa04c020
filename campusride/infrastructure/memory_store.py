"""
In-process ``RideStore`` kept in plain dicts.

Used by the service unit tests and handy for local experiments.  An
``asyncio.Lock`` makes every read-modify-write atomic per store, which is
the same guarantee the conditional UPDATE gives in the SQL store.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from campusride.domain.entities import Ride, RideRating, RideRequest
from campusride.domain.enums import RequestStatus, RideStatus


class InMemoryRideStore:
    def __init__(self):
        self._rides: dict[int, Ride] = {}
        self._requests: dict[int, RideRequest] = {}
        self._ratings: dict[int, RideRating] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    # Copies go in and out so callers cannot mutate stored records.

    async def get_ride(self, ride_id: int) -> Optional[Ride]:
        ride = self._rides.get(ride_id)
        return replace(ride) if ride else None

    async def get_all_rides(self) -> list[Ride]:
        return [replace(r) for r in self._rides.values()]

    async def create_ride(self, ride: Ride) -> Ride:
        stored = replace(
            ride, id=next(self._ids), created_at=datetime.now(timezone.utc)
        )
        self._rides[stored.id] = stored
        return replace(stored)

    async def update_ride_status(
        self,
        ride_id: int,
        status: RideStatus,
        expected: Optional[RideStatus] = None,
    ) -> Optional[Ride]:
        async with self._lock:
            ride = self._rides.get(ride_id)
            if ride is None or (expected is not None and ride.status != expected):
                return None
            ride.status = status
            return replace(ride)

    async def create_ride_request(self, request: RideRequest) -> RideRequest:
        stored = replace(
            request, id=next(self._ids), created_at=datetime.now(timezone.utc)
        )
        self._requests[stored.id] = stored
        return replace(stored)

    async def get_ride_request(self, request_id: int) -> Optional[RideRequest]:
        request = self._requests.get(request_id)
        return replace(request) if request else None

    async def get_ride_requests(self, ride_id: int) -> list[RideRequest]:
        return [replace(r) for r in self._requests.values() if r.ride_id == ride_id]

    async def update_ride_request_status(
        self,
        request_id: int,
        status: RequestStatus,
        expected: Optional[RequestStatus] = None,
    ) -> Optional[RideRequest]:
        async with self._lock:
            request = self._requests.get(request_id)
            if request is None or (
                expected is not None and request.status != expected
            ):
                return None
            request.status = status
            return replace(request)

    async def create_ride_rating(self, rating: RideRating) -> RideRating:
        stored = replace(
            rating, id=next(self._ids), created_at=datetime.now(timezone.utc)
        )
        self._ratings[stored.id] = stored
        return replace(stored)

    async def get_ride_ratings(self, ride_id: int) -> list[RideRating]:
        return [replace(r) for r in self._ratings.values() if r.ride_id == ride_id]
