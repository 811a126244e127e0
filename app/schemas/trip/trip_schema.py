from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime, timezone
from uuid import UUID

class TripDates(BaseModel):
    destination: str = Field(..., min_length=4)
    start_at: datetime
    ends_at: datetime

class TripCreate(TripDates):
    owner_name: str
    owner_email: EmailStr
    emails_to_invite: List[EmailStr]

class TripUpdate(TripDates):
    pass

# Both create and update answer with {"tripId": ...}
class TripIdResponse(BaseModel):
    trip_id: UUID = Field(..., alias="tripId")

    model_config = {
        "populate_by_name": True
    }

class ParticipantOut(BaseModel):
    id: UUID
    name: Optional[str] = None
    email: EmailStr
    is_owner: bool
    is_confirmed: bool

    model_config = {
        "from_attributes": True
    }

class TripDetailResponse(BaseModel):
    id: UUID
    destination: str
    start_at: datetime
    ends_at: datetime
    is_confirmed: bool
    participants: List[ParticipantOut]

    # Stored in UTC; some drivers hand the value back without its offset
    @field_validator("start_at", "ends_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    model_config = {
        "from_attributes": True
    }
