from datetime import datetime, timezone
from typing import Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from app.core.errors import ClientError, NotFoundError, PersistenceError
from app.core.logger import logger
from app.models.trips.trip_model import Trip
from app.models.trips.participant_model import Participant
from app.schemas.trip.trip_schema import TripCreate, TripUpdate, TripDates
from app.services.trips.trip_notifications import TripNotifier


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC; aware ones are shifted to UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate_trip_dates(start_at: datetime, ends_at: datetime, now: datetime = None) -> None:
    now = now or datetime.now(timezone.utc)
    start_at, ends_at = _as_utc(start_at), _as_utc(ends_at)

    if start_at < now:
        raise ClientError("Invalid trip start date.")

    if ends_at < start_at:
        raise ClientError("Invalid trip end date.")


class TripService:
    def __init__(self, notifier: TripNotifier):
        self.notifier = notifier

    async def _commit(self, db: AsyncSession, action: str) -> None:
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise PersistenceError(f"Failed to {action}.") from e

    async def _find_trip(self, db: AsyncSession, trip_id: UUID) -> Trip:
        try:
            result = await db.execute(
                select(Trip)
                .options(selectinload(Trip.participants))
                .where(Trip.id == trip_id)
            )
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to load trip.") from e
        trip = result.scalar_one_or_none()

        if not trip:
            logger.warning(f"Trip not found: ID {trip_id}")
            raise NotFoundError("Trip not found.")

        return trip

    @staticmethod
    def _checked_dates(trip_data: TripDates) -> Tuple[datetime, datetime]:
        """Validate the date range and return it in UTC, ready to store."""
        start_at, ends_at = _as_utc(trip_data.start_at), _as_utc(trip_data.ends_at)
        validate_trip_dates(start_at, ends_at)
        return start_at, ends_at

    async def create_trip(self, db: AsyncSession, trip_data: TripCreate) -> Trip:
        start_at, ends_at = self._checked_dates(trip_data)

        owner = Participant(
            name=trip_data.owner_name,
            email=trip_data.owner_email,
            is_owner=True,
            is_confirmed=True,
        )
        invitees = [
            Participant(email=email, is_owner=False, is_confirmed=False)
            for email in trip_data.emails_to_invite
        ]
        new_trip = Trip(
            destination=trip_data.destination,
            start_at=start_at,
            ends_at=ends_at,
            is_confirmed=False,
            participants=[owner, *invitees],
        )

        # Trip and every participant go out in the same transaction
        db.add(new_trip)
        await self._commit(db, "create trip")

        logger.info(f"Trip {new_trip.id} created for {trip_data.owner_email} with {len(invitees)} invitees")

        await self.notifier.send_trip_confirmation(new_trip, owner)
        return new_trip

    async def get_trip(self, db: AsyncSession, trip_id: UUID) -> Trip:
        return await self._find_trip(db, trip_id)

    async def update_trip(self, db: AsyncSession, trip_id: UUID, trip_data: TripUpdate) -> Trip:
        trip = await self._find_trip(db, trip_id)
        start_at, ends_at = self._checked_dates(trip_data)

        trip.destination = trip_data.destination
        trip.start_at = start_at
        trip.ends_at = ends_at

        await self._commit(db, "update trip")

        logger.info(f"Trip ID {trip_id} updated")
        return trip

    async def confirm_trip(self, db: AsyncSession, trip_id: UUID) -> Trip:
        trip = await self._find_trip(db, trip_id)

        if trip.is_confirmed:
            logger.info(f"Trip ID {trip_id} already confirmed")
            return trip

        trip.is_confirmed = True
        # The flag is durable before any invite goes out
        await self._commit(db, "confirm trip")
        logger.info(f"Trip ID {trip_id} confirmed")

        await self.notifier.send_trip_invites(trip, trip.invitees)
        return trip
