"""
SQLAlchemy ORM models  (maps to PostgreSQL).

Tables
------
* ``users``          -- registered students
* ``rides``          -- ride offers, owned by their creator
* ``ride_requests``  -- join requests against a ride
* ``ride_ratings``   -- post-completion reviews

Indexes
-------
* **B-Tree** on ``status`` and every foreign key, which covers the
  per-ride listings and the creator look-ups the API makes.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)

from .database import Base
from campusride.domain.enums import RequestStatus, RideStatus


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(64), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(120), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class RideModel(Base):
    __tablename__ = "rides"

    id = Column(Integer, primary_key=True, autoincrement=True)
    creator_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    source = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=False)
    departure_time = Column(DateTime(timezone=True), nullable=False)
    available_seats = Column(Integer, nullable=False)
    cost_per_seat = Column(Integer, nullable=False)
    status = Column(
        Enum(RideStatus, name="ridestatus", values_callable=_enum_values),
        default=RideStatus.PENDING,
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_rides_status", "status"),
        Index("idx_rides_creator", "creator_id"),
    )


class RideRequestModel(Base):
    __tablename__ = "ride_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ride_id = Column(Integer, ForeignKey("rides.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(
        Enum(RequestStatus, name="requeststatus", values_callable=_enum_values),
        default=RequestStatus.PENDING,
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_ride_requests_ride", "ride_id"),
        Index("idx_ride_requests_user", "user_id"),
        Index("idx_ride_requests_status", "status"),
    )


class RideRatingModel(Base):
    __tablename__ = "ride_ratings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ride_id = Column(Integer, ForeignKey("rides.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    rating = Column(Integer, nullable=False)
    review = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_ride_ratings_ride", "ride_id"),
        Index("idx_ride_ratings_user", "user_id"),
    )
