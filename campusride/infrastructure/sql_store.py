"""``RideStore`` backed by the SQLAlchemy repositories (one session per call site)."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from .models import RideModel, RideRatingModel, RideRequestModel
from .repositories import (
    RideRatingRepository,
    RideRepository,
    RideRequestRepository,
)
from campusride.domain.entities import Ride, RideRating, RideRequest
from campusride.domain.enums import RequestStatus, RideStatus


# ── Model -> entity mapping ───────────────────────────────────────────


def ride_from_model(m: RideModel) -> Ride:
    return Ride(
        id=m.id,
        creator_id=m.creator_id,
        source=m.source,
        destination=m.destination,
        departure_time=m.departure_time,
        available_seats=m.available_seats,
        cost_per_seat=m.cost_per_seat,
        status=RideStatus(m.status),
        created_at=m.created_at,
    )


def request_from_model(m: RideRequestModel) -> RideRequest:
    return RideRequest(
        id=m.id,
        ride_id=m.ride_id,
        user_id=m.user_id,
        status=RequestStatus(m.status),
        created_at=m.created_at,
    )


def rating_from_model(m: RideRatingModel) -> RideRating:
    return RideRating(
        id=m.id,
        ride_id=m.ride_id,
        user_id=m.user_id,
        rating=m.rating,
        review=m.review,
        created_at=m.created_at,
    )


class SqlAlchemyRideStore:
    def __init__(self, session: AsyncSession):
        self.rides = RideRepository(session)
        self.requests = RideRequestRepository(session)
        self.ratings = RideRatingRepository(session)

    # ── Rides ─────────────────────────────────────────────────────────

    async def get_ride(self, ride_id: int) -> Optional[Ride]:
        m = await self.rides.get_by_id(ride_id)
        return ride_from_model(m) if m else None

    async def get_all_rides(self) -> list[Ride]:
        return [ride_from_model(m) for m in await self.rides.get_all()]

    async def create_ride(self, ride: Ride) -> Ride:
        m = await self.rides.create(
            RideModel(
                creator_id=ride.creator_id,
                source=ride.source,
                destination=ride.destination,
                departure_time=ride.departure_time,
                available_seats=ride.available_seats,
                cost_per_seat=ride.cost_per_seat,
                status=ride.status,
            )
        )
        return ride_from_model(m)

    async def update_ride_status(
        self,
        ride_id: int,
        status: RideStatus,
        expected: Optional[RideStatus] = None,
    ) -> Optional[Ride]:
        m = await self.rides.update_status(ride_id, status, expected=expected)
        return ride_from_model(m) if m else None

    # ── Requests ──────────────────────────────────────────────────────

    async def create_ride_request(self, request: RideRequest) -> RideRequest:
        m = await self.requests.create(
            RideRequestModel(
                ride_id=request.ride_id,
                user_id=request.user_id,
                status=request.status,
            )
        )
        return request_from_model(m)

    async def get_ride_request(self, request_id: int) -> Optional[RideRequest]:
        m = await self.requests.get_by_id(request_id)
        return request_from_model(m) if m else None

    async def get_ride_requests(self, ride_id: int) -> list[RideRequest]:
        return [request_from_model(m) for m in await self.requests.get_for_ride(ride_id)]

    async def update_ride_request_status(
        self,
        request_id: int,
        status: RequestStatus,
        expected: Optional[RequestStatus] = None,
    ) -> Optional[RideRequest]:
        m = await self.requests.update_status(request_id, status, expected=expected)
        return request_from_model(m) if m else None

    # ── Ratings ───────────────────────────────────────────────────────

    async def create_ride_rating(self, rating: RideRating) -> RideRating:
        m = await self.ratings.create(
            RideRatingModel(
                ride_id=rating.ride_id,
                user_id=rating.user_id,
                rating=rating.rating,
                review=rating.review,
            )
        )
        return rating_from_model(m)

    async def get_ride_ratings(self, ride_id: int) -> list[RideRating]:
        return [rating_from_model(m) for m in await self.ratings.get_for_ride(ride_id)]
