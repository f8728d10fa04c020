"""
Request Workflow Engine
=======================

Join requests against a ride and the creator's accept / reject decision.

Rules
-----
* The creator can never request a seat on their own ride.
* Only ``active`` rides take new join requests.
* Only the creator decides, and only while the request is ``pending``;
  ``accepted`` and ``rejected`` are terminal.
* Accepting a request does **not** touch ``available_seats``; seats are
  advisory.
"""

from __future__ import annotations

import logging

from .entities import Ride, RideRequest
from .enums import REQUEST_DECISIONS, RequestStatus, RideStatus
from .errors import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    SelfRequestError,
    ValidationError,
)
from .store import RideStore

logger = logging.getLogger(__name__)


class RequestWorkflow:
    def __init__(self, store: RideStore, unique_requests: bool = False):
        self.store = store
        self.unique_requests = unique_requests

    async def _get_ride(self, ride_id: int) -> Ride:
        ride = await self.store.get_ride(ride_id)
        if ride is None:
            raise NotFoundError(f"Ride {ride_id} not found", code="ride_not_found")
        return ride

    async def create_request(self, ride_id: int, requester_id: int) -> RideRequest:
        ride = await self._get_ride(ride_id)
        if ride.is_creator(requester_id):
            raise SelfRequestError("You cannot request to join your own ride")
        if ride.status != RideStatus.ACTIVE:
            raise InvalidStateError(
                f"Ride {ride_id} is {ride.status.value}; only active rides "
                "accept join requests",
                code="ride_not_active",
            )

        if self.unique_requests:
            existing = await self.store.get_ride_requests(ride_id)
            if any(r.user_id == requester_id and r.is_open for r in existing):
                raise InvalidStateError(
                    "You already have an open request for this ride",
                    code="duplicate_request",
                )

        request = await self.store.create_ride_request(
            RideRequest(
                ride_id=ride_id,
                user_id=requester_id,
                status=RequestStatus.PENDING,
            )
        )
        logger.info(
            "User %s requested to join ride %s (request %s)",
            requester_id,
            ride_id,
            request.id,
        )
        return request

    async def authorize_decision(
        self, ride_id: int, decided_by: int, decision: RequestStatus | str
    ) -> RequestStatus:
        """Validate the decision value and that ``decided_by`` owns the ride.

        Runs before any per-request lock is taken, so callers who may not
        decide never hold it.
        """
        try:
            outcome = RequestStatus(decision)
        except ValueError:
            outcome = None
        if outcome not in REQUEST_DECISIONS:
            raise ValidationError(
                "Decision must be one of: accepted, rejected",
                code="invalid_decision",
            )

        ride = await self._get_ride(ride_id)
        if not ride.is_creator(decided_by):
            raise ForbiddenError(
                "Only the ride creator can decide join requests",
                code="not_ride_creator",
            )
        return outcome

    async def decide_request(
        self,
        ride_id: int,
        request_id: int,
        decided_by: int,
        decision: RequestStatus | str,
    ) -> RideRequest:
        outcome = await self.authorize_decision(ride_id, decided_by, decision)

        request = await self.store.get_ride_request(request_id)
        if request is None or request.ride_id != ride_id:
            raise NotFoundError(
                f"Request {request_id} not found for ride {ride_id}",
                code="request_not_found",
            )

        request.decide(outcome)
        updated = await self.store.update_ride_request_status(
            request_id, outcome, expected=RequestStatus.PENDING
        )
        if updated is None:
            raise InvalidStateError(
                f"Request {request_id} was decided concurrently",
                code="request_already_decided",
            )
        logger.info(
            "Request %s on ride %s %s by user %s",
            request_id,
            ride_id,
            outcome.value,
            decided_by,
        )
        return updated

    async def list_requests_for_ride(
        self, ride_id: int, caller_id: int
    ) -> list[RideRequest]:
        ride = await self._get_ride(ride_id)
        if not ride.is_creator(caller_id):
            raise ForbiddenError(
                "Only the ride creator can view its join requests",
                code="not_ride_creator",
            )
        return await self.store.get_ride_requests(ride_id)
