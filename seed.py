"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 6 sample users (password: ``password123``)
  - 5 sample rides (mix of pending, active, completed)
  - join requests on the active rides
  - ratings on the completed ride
"""

import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import text

from campusride.domain.enums import RequestStatus, RideStatus
from campusride.infrastructure.database import async_session_factory, dispose_engine
from campusride.infrastructure.models import (
    RideModel,
    RideRatingModel,
    RideRequestModel,
    UserModel,
)
from campusride.infrastructure.security import hash_password

DEFAULT_PASSWORD = "password123"

USERS = [
    {"username": "aarav", "full_name": "Aarav Sharma"},
    {"username": "priya", "full_name": "Priya Patel"},
    {"username": "rohan", "full_name": "Rohan Mehta"},
    {"username": "sneha", "full_name": "Sneha Gupta"},
    {"username": "vikram", "full_name": "Vikram Singh"},
    {"username": "ananya", "full_name": "Ananya Reddy"},
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM users"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        # ── Users ─────────────────────────────────────────────────────
        password_hash = hash_password(DEFAULT_PASSWORD)
        users = []
        for u in USERS:
            m = UserModel(
                username=u["username"],
                full_name=u["full_name"],
                password_hash=password_hash,
            )
            session.add(m)
            users.append(m)
        await session.flush()
        print(f"  Created {len(users)} users")

        # ── Rides ─────────────────────────────────────────────────────
        now = datetime.now(timezone.utc)
        rides_data = [
            {
                "creator": users[0],
                "source": "IIT Indore",
                "destination": "Indore Airport",
                "departure": now + timedelta(days=1, hours=3),
                "seats": 3, "cost": 100,
                "status": RideStatus.ACTIVE,
            },
            {
                "creator": users[1],
                "source": "IIT Indore Main Gate",
                "destination": "Indore Junction Railway Station",
                "departure": now + timedelta(days=2),
                "seats": 2, "cost": 80,
                "status": RideStatus.ACTIVE,
            },
            {
                "creator": users[2],
                "source": "Simrol Campus",
                "destination": "Rajwada",
                "departure": now + timedelta(days=3),
                "seats": 4, "cost": 60,
                "status": RideStatus.PENDING,
            },
            {
                "creator": users[3],
                "source": "IIT Indore",
                "destination": "Vijay Nagar",
                "departure": now + timedelta(days=5),
                "seats": 3, "cost": 90,
                "status": RideStatus.PENDING,
            },
            {
                "creator": users[4],
                "source": "Indore Airport",
                "destination": "IIT Indore",
                "departure": now - timedelta(days=2),
                "seats": 3, "cost": 120,
                "status": RideStatus.COMPLETED,
            },
        ]

        rides = []
        for r in rides_data:
            m = RideModel(
                creator_id=r["creator"].id,
                source=r["source"],
                destination=r["destination"],
                departure_time=r["departure"],
                available_seats=r["seats"],
                cost_per_seat=r["cost"],
                status=r["status"],
            )
            session.add(m)
            rides.append(m)
        await session.flush()
        print(f"  Created {len(rides)} rides")

        # ── Join requests ─────────────────────────────────────────────
        requests = [
            RideRequestModel(
                ride_id=rides[0].id, user_id=users[1].id,
                status=RequestStatus.ACCEPTED,
            ),
            RideRequestModel(
                ride_id=rides[0].id, user_id=users[5].id,
                status=RequestStatus.PENDING,
            ),
            RideRequestModel(
                ride_id=rides[1].id, user_id=users[2].id,
                status=RequestStatus.REJECTED,
            ),
            RideRequestModel(
                ride_id=rides[4].id, user_id=users[0].id,
                status=RequestStatus.ACCEPTED,
            ),
        ]
        session.add_all(requests)
        await session.flush()
        print(f"  Created {len(requests)} join requests")

        # ── Ratings ───────────────────────────────────────────────────
        session.add(
            RideRatingModel(
                ride_id=rides[4].id,
                user_id=users[0].id,
                rating=4,
                review="great ride",
            )
        )
        await session.flush()
        print("  Created 1 rating")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
