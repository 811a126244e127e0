import asyncio
from datetime import datetime
from typing import List
from uuid import UUID

from app.core.config import settings
from app.core.errors import NotificationError
from app.core.logger import logger
from app.core.mail import MailClient, MailMessage
from app.models.trips.trip_model import Trip
from app.models.trips.participant_model import Participant


def format_trip_date(value: datetime) -> str:
    """Long date, e.g. ``October 20, 2026``."""
    return f"{value:%B} {value.day}, {value.year}"

def generate_trip_confirmation_link(trip_id: UUID) -> str:
    return f"{settings.API_BASE_URL}/trips/{trip_id}/confirm"

def generate_participant_confirmation_link(participant_id: UUID) -> str:
    return f"{settings.API_BASE_URL}/participants/{participant_id}/confirm"

def _render_body(intro: str, call_to_action: str, link: str) -> str:
    return f"""
    <div style="font-family: sans-serif; font-size: 16px; line-height: 1.6;">
        <p>{intro}</p>
        <p></p>
        <p>{call_to_action}</p>
        <p></p>
        <p>
            <a href="{link}">Confirm trip</a>
        </p>
        <p></p>
        <p>If you don't know what this email is about, just ignore it.</p>
    </div>
    """.strip()

def build_trip_confirmation_email(trip: Trip, owner: Participant) -> MailMessage:
    """
    Email asking the owner to confirm the trip they just created.
    """
    start = format_trip_date(trip.start_at)
    end = format_trip_date(trip.ends_at)

    return MailMessage(
        from_name=settings.MAIL_FROM_NAME,
        from_address=settings.MAIL_FROM_ADDRESS,
        to_name=owner.name,
        to_address=owner.email,
        subject=f"Confirm your trip to {trip.destination} on {start}",
        html=_render_body(
            intro=(
                f"You requested the creation of a trip to <strong>{trip.destination}</strong> "
                f"from <strong>{start} to {end}</strong>."
            ),
            call_to_action="To confirm your trip, click the link below:",
            link=generate_trip_confirmation_link(trip.id),
        ),
    )

def build_trip_invite_email(trip: Trip, participant: Participant) -> MailMessage:
    """
    Email inviting a participant to a trip that was just confirmed.
    """
    start = format_trip_date(trip.start_at)
    end = format_trip_date(trip.ends_at)

    return MailMessage(
        from_name=settings.MAIL_FROM_NAME,
        from_address=settings.MAIL_FROM_ADDRESS,
        to_name=participant.name,
        to_address=participant.email,
        subject=f"Confirm your attendance on the trip to {trip.destination} on {start}",
        html=_render_body(
            intro=(
                f"You have been invited to join a trip to <strong>{trip.destination}</strong> "
                f"from <strong>{start} to {end}</strong>."
            ),
            call_to_action="To confirm your attendance, click the link below:",
            link=generate_participant_confirmation_link(participant.id),
        ),
    )


class TripNotifier:
    def __init__(self, mail: MailClient):
        self.mail = mail

    async def send_trip_confirmation(self, trip: Trip, owner: Participant) -> None:
        # Not caught: a failed send fails the create request
        await self.mail.send_mail(build_trip_confirmation_email(trip, owner))

    async def send_trip_invites(self, trip: Trip, participants: List[Participant]) -> int:
        """Send every invite concurrently, returning how many went out."""
        results = await asyncio.gather(
            *(self.mail.send_mail(build_trip_invite_email(trip, p)) for p in participants),
            return_exceptions=True,
        )

        sent = 0
        for participant, result in zip(participants, results):
            if isinstance(result, NotificationError):
                logger.warning(f"[Trip Invite] Failed to send to {participant.email}: {result.message}")
            elif isinstance(result, BaseException):
                raise result
            else:
                sent += 1

        logger.info(f"[Trip Invite] Sent {sent}/{len(participants)} invites for trip {trip.id}")
        return sent
