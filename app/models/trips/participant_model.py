from sqlalchemy import Column, String, ForeignKey, Boolean, Uuid, Index
from sqlalchemy.orm import relationship
from app.core.database import Base
import uuid

class Participant(Base):
    __tablename__ = "participants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id = Column(Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)

    # Invitees are known only by email until they fill in their name
    name = Column(String, nullable=True)
    email = Column(String, nullable=False)

    is_owner = Column(Boolean, nullable=False, default=False)
    is_confirmed = Column(Boolean, nullable=False, default=False)

    trip = relationship("Trip", back_populates="participants")

    __table_args__ = (
        Index("ix_participants_trip_id", "trip_id"),
    )
