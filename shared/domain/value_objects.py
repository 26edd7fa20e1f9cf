"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: A stay from start_date (inclusive) to end_date (exclusive)
- GeoPoint: A coordinate in decimal degrees
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import ValueObject

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for reservation periods and pricing.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def __len__(self) -> int:
        """Number of whole days (nights) in this range"""
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"


@dataclass(frozen=True)
class GeoPoint(ValueObject):
    """
    Geographic coordinate in decimal degrees.

    Latitude must be within [-90, 90] and longitude within [-180, 180].
    """
    lat: float
    lng: float

    def __post_init__(self):
        if not -90 <= self.lat <= 90:
            raise ValueError(f"Latitude {self.lat} is out of range")
        if not -180 <= self.lng <= 180:
            raise ValueError(f"Longitude {self.lng} is out of range")

    def __str__(self):
        return f"({self.lat}, {self.lng})"
