"""Unit tests for ride and join-request state transitions (State Pattern)."""

import pytest

from campusride.domain.entities import Ride, RideRequest
from campusride.domain.enums import RequestStatus, RideStatus
from campusride.domain.errors import InvalidStateError, InvalidTransitionError


class TestRideStateMachine:
    def test_initial_status_is_pending(self):
        ride = Ride()
        assert ride.status == RideStatus.PENDING

    # ── Valid transitions ─────────────────────────────────────────

    def test_pending_to_active(self):
        ride = Ride(status=RideStatus.PENDING)
        ride.transition_to(RideStatus.ACTIVE)
        assert ride.status == RideStatus.ACTIVE

    def test_active_to_completed(self):
        ride = Ride(status=RideStatus.ACTIVE)
        ride.transition_to(RideStatus.COMPLETED)
        assert ride.status == RideStatus.COMPLETED

    # ── Invalid transitions ───────────────────────────────────────

    def test_pending_to_completed_fails(self):
        ride = Ride(status=RideStatus.PENDING)
        with pytest.raises(InvalidTransitionError):
            ride.transition_to(RideStatus.COMPLETED)
        assert ride.status == RideStatus.PENDING

    @pytest.mark.parametrize("status", list(RideStatus))
    def test_completed_is_terminal(self, status):
        ride = Ride(status=RideStatus.COMPLETED)
        with pytest.raises(InvalidTransitionError):
            ride.transition_to(status)

    def test_active_to_pending_fails(self):
        ride = Ride(status=RideStatus.ACTIVE)
        with pytest.raises(InvalidTransitionError):
            ride.transition_to(RideStatus.PENDING)

    @pytest.mark.parametrize("status", [RideStatus.PENDING, RideStatus.ACTIVE])
    def test_lateral_move_fails(self, status):
        ride = Ride(status=status)
        with pytest.raises(InvalidTransitionError):
            ride.transition_to(status)

    def test_is_creator(self):
        ride = Ride(creator_id=7)
        assert ride.is_creator(7)
        assert not ride.is_creator(8)


class TestRideRequestStateMachine:
    @pytest.mark.parametrize(
        "decision", [RequestStatus.ACCEPTED, RequestStatus.REJECTED]
    )
    def test_pending_can_be_decided(self, decision):
        request = RideRequest(status=RequestStatus.PENDING)
        request.decide(decision)
        assert request.status == decision

    @pytest.mark.parametrize(
        "terminal", [RequestStatus.ACCEPTED, RequestStatus.REJECTED]
    )
    def test_decided_request_never_changes(self, terminal):
        request = RideRequest(status=terminal)
        for decision in (RequestStatus.ACCEPTED, RequestStatus.REJECTED):
            with pytest.raises(InvalidStateError):
                request.decide(decision)
        assert request.status == terminal

    def test_rejected_request_is_not_open(self):
        assert RideRequest(status=RequestStatus.PENDING).is_open
        assert RideRequest(status=RequestStatus.ACCEPTED).is_open
        assert not RideRequest(status=RequestStatus.REJECTED).is_open
