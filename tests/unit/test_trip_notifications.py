"""Tests for trip email composition."""

import uuid
from datetime import datetime, timezone
from unittest.mock import patch

from app.core.config import settings
from app.models.trips.participant_model import Participant
from app.models.trips.trip_model import Trip
from app.services.trips.trip_notifications import (
    build_trip_confirmation_email,
    build_trip_invite_email,
    format_trip_date,
    generate_participant_confirmation_link,
    generate_trip_confirmation_link,
)


def make_trip():
    owner = Participant(id=uuid.uuid4(), name="Ana", email="ana@x.com", is_owner=True, is_confirmed=True)
    invitee = Participant(id=uuid.uuid4(), email="bob@x.com", is_owner=False, is_confirmed=False)
    trip = Trip(
        id=uuid.uuid4(),
        destination="Florianópolis",
        start_at=datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc),
        ends_at=datetime(2026, 10, 25, 18, 0, tzinfo=timezone.utc),
        is_confirmed=False,
        participants=[owner, invitee],
    )
    return trip, owner, invitee


def test_format_trip_date_has_no_leading_zero():
    assert format_trip_date(datetime(2026, 3, 5)) == "March 5, 2026"


def test_links_use_api_base_url():
    trip_id = uuid.uuid4()
    participant_id = uuid.uuid4()

    assert generate_trip_confirmation_link(trip_id) == f"{settings.API_BASE_URL}/trips/{trip_id}/confirm"
    assert (
        generate_participant_confirmation_link(participant_id)
        == f"{settings.API_BASE_URL}/participants/{participant_id}/confirm"
    )


def test_trip_confirmation_email():
    trip, owner, _ = make_trip()

    message = build_trip_confirmation_email(trip, owner)

    assert message.to_address == "ana@x.com"
    assert message.to_name == "Ana"
    assert message.from_address == settings.MAIL_FROM_ADDRESS
    assert message.subject == "Confirm your trip to Florianópolis on October 20, 2026"
    assert "October 20, 2026 to October 25, 2026" in message.html
    assert generate_trip_confirmation_link(trip.id) in message.html


def test_trip_invite_email_links_to_participant():
    trip, _, invitee = make_trip()

    message = build_trip_invite_email(trip, invitee)

    assert message.to_address == "bob@x.com"
    assert message.to_name is None
    assert "Florianópolis" in message.subject
    assert "October 20, 2026" in message.subject
    assert generate_participant_confirmation_link(invitee.id) in message.html


def test_owner_and_invitees_helpers():
    trip, owner, invitee = make_trip()

    assert trip.owner is owner
    assert trip.invitees == [invitee]


def test_confirmation_email_accepts_local_sender_address():
    trip, owner, _ = make_trip()

    with patch.object(settings, "MAIL_FROM_ADDRESS", "noreply@localhost"):
        message = build_trip_confirmation_email(trip, owner)

    assert message.from_address == "noreply@localhost"
