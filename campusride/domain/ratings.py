"""Rating Gate: who may rate a ride, and when."""

from __future__ import annotations

import logging
from typing import Optional

from .entities import Ride, RideRating
from .enums import RideStatus
from .errors import (
    InvalidStateError,
    NotFoundError,
    SelfRatingError,
    ValidationError,
)
from .store import RideStore

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 5


class RatingGate:
    def __init__(self, store: RideStore, unique_ratings: bool = False):
        self.store = store
        self.unique_ratings = unique_ratings

    async def _get_ride(self, ride_id: int) -> Ride:
        ride = await self.store.get_ride(ride_id)
        if ride is None:
            raise NotFoundError(f"Ride {ride_id} not found", code="ride_not_found")
        return ride

    async def submit_rating(
        self,
        ride_id: int,
        author_id: int,
        score: int,
        review: Optional[str] = None,
    ) -> RideRating:
        ride = await self._get_ride(ride_id)
        if ride.status != RideStatus.COMPLETED:
            raise InvalidStateError(
                f"Ride {ride_id} is {ride.status.value}; only completed rides "
                "can be rated",
                code="ride_not_completed",
            )
        if ride.is_creator(author_id):
            raise SelfRatingError("You cannot rate your own ride")
        if (
            isinstance(score, bool)
            or not isinstance(score, int)
            or not MIN_SCORE <= score <= MAX_SCORE
        ):
            raise ValidationError(
                f"Rating must be an integer between {MIN_SCORE} and {MAX_SCORE}",
                code="invalid_score",
            )

        if self.unique_ratings:
            existing = await self.store.get_ride_ratings(ride_id)
            if any(r.user_id == author_id for r in existing):
                raise InvalidStateError(
                    "You have already rated this ride",
                    code="duplicate_rating",
                )

        rating = await self.store.create_ride_rating(
            RideRating(
                ride_id=ride_id,
                user_id=author_id,
                rating=score,
                review=review,
            )
        )
        logger.info(
            "User %s rated ride %s with %d", author_id, ride_id, score
        )
        return rating

    async def list_ratings(self, ride_id: int) -> list[RideRating]:
        await self._get_ride(ride_id)
        return await self.store.get_ride_ratings(ride_id)
