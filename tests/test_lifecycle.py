"""Ride Lifecycle Manager against the in-memory store."""

from datetime import datetime

import pytest

from campusride.domain.entities import Ride
from campusride.domain.enums import RideStatus
from campusride.domain.errors import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from campusride.domain.lifecycle import RideLifecycleManager, filter_rides
from tests.conftest import CREATOR, PASSENGER, ride_attributes


@pytest.fixture
def lifecycle(store):
    return RideLifecycleManager(store)


class TestCreateRide:
    @pytest.mark.asyncio
    async def test_new_ride_is_pending_and_owned_by_creator(self, lifecycle):
        ride = await lifecycle.create_ride(CREATOR, ride_attributes())
        assert ride.id is not None
        assert ride.creator_id == CREATOR
        assert ride.status == RideStatus.PENDING
        assert ride.available_seats == 3
        assert ride.cost_per_seat == 100

    @pytest.mark.asyncio
    async def test_initial_status_can_be_active(self, store):
        lifecycle = RideLifecycleManager(store, initial_status=RideStatus.ACTIVE)
        ride = await lifecycle.create_ride(CREATOR, ride_attributes())
        assert ride.status == RideStatus.ACTIVE

    def test_completed_initial_status_rejected(self, store):
        with pytest.raises(ValueError):
            RideLifecycleManager(store, initial_status=RideStatus.COMPLETED)

    @pytest.mark.asyncio
    async def test_iso_departure_time_is_parsed(self, lifecycle):
        ride = await lifecycle.create_ride(
            CREATOR, ride_attributes(departure_time="2026-11-02T09:30:00+05:30")
        )
        assert isinstance(ride.departure_time, datetime)
        assert ride.departure_time.hour == 9

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"available_seats": 0},
            {"available_seats": -2},
            {"available_seats": 2.5},
            {"available_seats": True},
            {"cost_per_seat": 0},
            {"cost_per_seat": "100"},
            {"departure_time": "next tuesday"},
            {"departure_time": 1700000000},
            {"source": "   "},
            {"destination": None},
        ],
    )
    async def test_malformed_attributes_fail(self, lifecycle, store, overrides):
        with pytest.raises(ValidationError):
            await lifecycle.create_ride(CREATOR, ride_attributes(**overrides))
        assert await store.get_all_rides() == []

    @pytest.mark.asyncio
    async def test_missing_attribute_is_named(self, lifecycle):
        attrs = ride_attributes()
        del attrs["cost_per_seat"]
        with pytest.raises(ValidationError, match="cost_per_seat"):
            await lifecycle.create_ride(CREATOR, attrs)


class TestListRides:
    @pytest.mark.asyncio
    async def test_lists_every_status(self, store, lifecycle):
        pending = await lifecycle.create_ride(CREATOR, ride_attributes())
        active = await lifecycle.create_ride(CREATOR, ride_attributes())
        await lifecycle.advance_status(active.id, CREATOR, RideStatus.ACTIVE)

        rides = await lifecycle.list_rides()
        assert {r.id for r in rides} == {pending.id, active.id}

    @pytest.mark.asyncio
    async def test_empty_store_lists_nothing(self, lifecycle):
        assert await lifecycle.list_rides() == []

    @pytest.mark.asyncio
    async def test_filters_are_case_insensitive_substrings(self, lifecycle):
        await lifecycle.create_ride(CREATOR, ride_attributes())
        await lifecycle.create_ride(
            CREATOR, ride_attributes(source="Rajwada", destination="IIT Indore")
        )

        rides = await lifecycle.list_rides(source="iit")
        assert [r.source for r in rides] == ["IIT Indore"]

        rides = await lifecycle.list_rides(destination="indore")
        assert [r.destination for r in rides] == ["IIT Indore"]

        rides = await lifecycle.list_rides(source="iit", destination="AIR")
        assert len(rides) == 1


def test_filter_rides_without_terms_keeps_everything():
    rides = [Ride(source="A", destination="B"), Ride(source="C", destination="D")]
    assert filter_rides(rides) == rides


class TestAdvanceStatus:
    @pytest.mark.asyncio
    async def test_full_forward_path(self, lifecycle):
        ride = await lifecycle.create_ride(CREATOR, ride_attributes())

        ride = await lifecycle.advance_status(ride.id, CREATOR, RideStatus.ACTIVE)
        assert ride.status == RideStatus.ACTIVE

        ride = await lifecycle.advance_status(ride.id, CREATOR, "completed")
        assert ride.status == RideStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_skipping_to_completed_fails(self, lifecycle, store):
        ride = await lifecycle.create_ride(CREATOR, ride_attributes())
        with pytest.raises(InvalidTransitionError):
            await lifecycle.advance_status(ride.id, CREATOR, RideStatus.COMPLETED)
        assert (await store.get_ride(ride.id)).status == RideStatus.PENDING

    @pytest.mark.asyncio
    async def test_backward_move_fails(self, lifecycle):
        ride = await lifecycle.create_ride(CREATOR, ride_attributes())
        await lifecycle.advance_status(ride.id, CREATOR, RideStatus.ACTIVE)
        await lifecycle.advance_status(ride.id, CREATOR, RideStatus.COMPLETED)

        for target in RideStatus:
            with pytest.raises(InvalidTransitionError):
                await lifecycle.advance_status(ride.id, CREATOR, target)

    @pytest.mark.asyncio
    async def test_unknown_status_fails(self, lifecycle):
        ride = await lifecycle.create_ride(CREATOR, ride_attributes())
        with pytest.raises(InvalidTransitionError):
            await lifecycle.advance_status(ride.id, CREATOR, "cancelled")

    @pytest.mark.asyncio
    async def test_only_creator_may_advance(self, lifecycle, store):
        ride = await lifecycle.create_ride(CREATOR, ride_attributes())
        with pytest.raises(ForbiddenError):
            await lifecycle.advance_status(ride.id, PASSENGER, RideStatus.ACTIVE)
        assert (await store.get_ride(ride.id)).status == RideStatus.PENDING

    @pytest.mark.asyncio
    async def test_missing_ride(self, lifecycle):
        with pytest.raises(NotFoundError):
            await lifecycle.advance_status(999, CREATOR, RideStatus.ACTIVE)

    @pytest.mark.asyncio
    async def test_other_fields_untouched(self, lifecycle):
        ride = await lifecycle.create_ride(CREATOR, ride_attributes())
        updated = await lifecycle.advance_status(ride.id, CREATOR, RideStatus.ACTIVE)
        assert updated.source == ride.source
        assert updated.destination == ride.destination
        assert updated.departure_time == ride.departure_time
        assert updated.available_seats == ride.available_seats
        assert updated.cost_per_seat == ride.cost_per_seat
        assert updated.creator_id == ride.creator_id

    @pytest.mark.asyncio
    async def test_stale_status_write_fails(self, lifecycle, store):
        ride = await lifecycle.create_ride(CREATOR, ride_attributes())
        original_get = store.get_ride

        async def stale_get(ride_id):
            # Simulate a concurrent advance landing after our read
            snapshot = await original_get(ride_id)
            await store.update_ride_status(ride_id, RideStatus.ACTIVE)
            return snapshot

        store.get_ride = stale_get
        with pytest.raises(InvalidTransitionError):
            await lifecycle.advance_status(ride.id, CREATOR, RideStatus.ACTIVE)
