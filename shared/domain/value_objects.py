"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: Represents a half-open range of dates (check-in to check-out)
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for booking periods, availability checks, calendar months, etc.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        # Validation
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    @classmethod
    def for_day(cls, day: date) -> 'DateRange':
        """Singleton range [day, day + 1)"""
        return cls(day, day + timedelta(days=1))

    @classmethod
    def for_month(cls, year: int, month: int) -> 'DateRange':
        """Range covering a whole calendar month"""
        first = date(year, month, 1)
        days_in_month = calendar.monthrange(year, month)[1]
        return cls(first, first + timedelta(days=days_in_month))

    def overlaps(self, start: date, end: date) -> bool:
        """
        Overlap test against raw boundaries.

        The same formula is used whether the record is stored as a
        half-open range (bookings) or a closed one (blocks):
        start < self.end_date AND end > self.start_date
        """
        return start < self.end_date and end > self.start_date

    def days(self) -> Iterator[date]:
        """Iterate every date in the range, in order"""
        current = self.start_date
        while current < self.end_date:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        """
        Return the number of days (nights) in this range

        This is the number of nights for a booking.
        """
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.strftime('%d.%m.%Y')} - {self.end_date.strftime('%d.%m.%Y')}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
