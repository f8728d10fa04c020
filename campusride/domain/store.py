"""
Storage capability consumed by the ride services.

The services never import a database module; they receive an object
implementing ``RideStore`` and talk to it only through these calls.
Lookups return ``None`` for a missing record and an empty list for an
empty collection, never the other way round.

``expected`` on the update calls is a compare-and-set guard: the write
only happens if the stored status still equals it, otherwise ``None`` is
returned and nothing changes.
"""

from __future__ import annotations

from typing import Optional, Protocol

from .entities import Ride, RideRating, RideRequest
from .enums import RequestStatus, RideStatus


class RideStore(Protocol):
    async def get_ride(self, ride_id: int) -> Optional[Ride]: ...

    async def get_all_rides(self) -> list[Ride]: ...

    async def create_ride(self, ride: Ride) -> Ride: ...

    async def update_ride_status(
        self,
        ride_id: int,
        status: RideStatus,
        expected: Optional[RideStatus] = None,
    ) -> Optional[Ride]: ...

    async def create_ride_request(self, request: RideRequest) -> RideRequest: ...

    async def get_ride_request(self, request_id: int) -> Optional[RideRequest]: ...

    async def get_ride_requests(self, ride_id: int) -> list[RideRequest]: ...

    async def update_ride_request_status(
        self,
        request_id: int,
        status: RequestStatus,
        expected: Optional[RequestStatus] = None,
    ) -> Optional[RideRequest]: ...

    async def create_ride_rating(self, rating: RideRating) -> RideRating: ...

    async def get_ride_ratings(self, ride_id: int) -> list[RideRating]: ...
