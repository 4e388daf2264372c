"""Accommodation models - multi-day stays and their all-day bar placement."""

from enum import Enum

from pydantic import BaseModel, Field

from tripcal.models.common import TimeInterval


class AccommodationType(str, Enum):
    """Accommodation category."""

    hotel = "hotel"
    hostel = "hostel"
    airbnb = "airbnb"
    resort = "resort"
    other = "other"


class Accommodation(TimeInterval):
    """A stay booked for a trip (check-in to check-out)."""

    id: str
    travel_id: str
    name: str = ""
    type: AccommodationType = AccommodationType.other


class PlacedAccommodation(BaseModel):
    """Accommodation with the row assigned for the current day window."""

    accommodation: Accommodation
    row: int = Field(..., ge=0)

    @property
    def id(self) -> str:
        return self.accommodation.id


class BarSpan(BaseModel):
    """Horizontal extent of an accommodation bar in the all-day section."""

    start_day: int
    end_day: int
    left: float  # Pixels
    width: float  # Pixels
