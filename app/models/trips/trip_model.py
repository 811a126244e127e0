from sqlalchemy import Column, String, DateTime, Boolean, Uuid, func
from app.core.database import Base
from sqlalchemy.orm import relationship
import uuid

class Trip(Base):
    __tablename__ = "trips"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    destination = Column(String, nullable=False)
    start_at = Column(DateTime(timezone=True), nullable=False)
    ends_at = Column(DateTime(timezone=True), nullable=False)
    # Flips to True once, from the emailed confirmation link
    is_confirmed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    participants = relationship(
        "Participant",
        back_populates="trip",
        cascade="all, delete-orphan",
    )

    @property
    def owner(self):
        return next((p for p in self.participants if p.is_owner), None)

    @property
    def invitees(self):
        return [p for p in self.participants if not p.is_owner]

