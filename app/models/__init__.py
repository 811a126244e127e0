from .trips.trip_model import Trip
from .trips.participant_model import Participant
