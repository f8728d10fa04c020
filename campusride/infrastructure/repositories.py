"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.  Status updates take an optional
``expected`` value and are issued as a single conditional UPDATE, so a
stale writer updates zero rows instead of overwriting a newer status.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import RideModel, RideRatingModel, RideRequestModel, UserModel
from campusride.domain.enums import RequestStatus, RideStatus


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self, *, username: str, password_hash: str, full_name: str
    ) -> UserModel:
        user = UserModel(
            username=username,
            password_hash=password_hash,
            full_name=full_name,
        )
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: int) -> Optional[UserModel]:
        return await self.session.get(UserModel, user_id)

    async def get_by_username(self, username: str) -> Optional[UserModel]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        return result.scalar_one_or_none()


class RideRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, ride: RideModel) -> RideModel:
        self.session.add(ride)
        await self.session.flush()
        await self.session.refresh(ride)
        return ride

    async def get_by_id(self, ride_id: int) -> Optional[RideModel]:
        return await self.session.get(RideModel, ride_id)

    async def get_all(self) -> list[RideModel]:
        result = await self.session.execute(
            select(RideModel).order_by(RideModel.departure_time, RideModel.id)
        )
        return list(result.scalars().all())

    async def update_status(
        self,
        ride_id: int,
        status: RideStatus,
        expected: Optional[RideStatus] = None,
    ) -> Optional[RideModel]:
        stmt = update(RideModel).where(RideModel.id == ride_id)
        if expected is not None:
            stmt = stmt.where(RideModel.status == expected)
        result = await self.session.execute(
            stmt.values(status=status).execution_options(
                synchronize_session=False
            )
        )
        if result.rowcount == 0:
            return None
        return await self.session.get(RideModel, ride_id, populate_existing=True)


class RideRequestRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, request: RideRequestModel) -> RideRequestModel:
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def get_by_id(self, request_id: int) -> Optional[RideRequestModel]:
        return await self.session.get(RideRequestModel, request_id)

    async def get_for_ride(self, ride_id: int) -> list[RideRequestModel]:
        result = await self.session.execute(
            select(RideRequestModel)
            .where(RideRequestModel.ride_id == ride_id)
            .order_by(RideRequestModel.id)
        )
        return list(result.scalars().all())

    async def update_status(
        self,
        request_id: int,
        status: RequestStatus,
        expected: Optional[RequestStatus] = None,
    ) -> Optional[RideRequestModel]:
        stmt = update(RideRequestModel).where(RideRequestModel.id == request_id)
        if expected is not None:
            stmt = stmt.where(RideRequestModel.status == expected)
        result = await self.session.execute(
            stmt.values(status=status).execution_options(
                synchronize_session=False
            )
        )
        if result.rowcount == 0:
            return None
        return await self.session.get(
            RideRequestModel, request_id, populate_existing=True
        )


class RideRatingRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, rating: RideRatingModel) -> RideRatingModel:
        self.session.add(rating)
        await self.session.flush()
        await self.session.refresh(rating)
        return rating

    async def get_for_ride(self, ride_id: int) -> list[RideRatingModel]:
        result = await self.session.execute(
            select(RideRatingModel)
            .where(RideRatingModel.ride_id == ride_id)
            .order_by(RideRatingModel.id)
        )
        return list(result.scalars().all())
