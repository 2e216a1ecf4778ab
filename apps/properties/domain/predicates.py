"""Search predicate built from the guest's search criteria.

The predicate is a plain value; the Django store turns it into ORM filters
(``apps.properties.filters``) and test doubles evaluate it with
``matches``. Both must agree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from shared.domain.value_objects import DateRange

from .projections import PropertyWithRooms, RoomSnapshot


def split_category_terms(category_name: Optional[str]) -> Tuple[str, ...]:
    """``"Villa, Hotel"`` -> ``("Villa", "Hotel")``; blanks are dropped."""
    if not category_name:
        return ()
    return tuple(term.strip() for term in category_name.split(",") if term.strip())


@dataclass(frozen=True)
class SearchPredicate:
    city_id: int
    guests: int
    window: DateRange
    property_name: Optional[str] = None
    category_terms: Tuple[str, ...] = ()

    @property
    def category_is_substring(self) -> bool:
        """A single term matches by substring, several terms by exact name."""
        return len(self.category_terms) == 1

    def room_matches(self, room: RoomSnapshot) -> bool:
        return room.max_guests >= self.guests and room.quantity > 0

    def category_matches(self, category_name: Optional[str]) -> bool:
        if not self.category_terms:
            return True
        if category_name is None:
            return False
        name = category_name.casefold()
        if self.category_is_substring:
            return self.category_terms[0].casefold() in name
        return name in {term.casefold() for term in self.category_terms}

    def matches(self, prop: PropertyWithRooms) -> bool:
        if prop.city is None or prop.city.id != self.city_id:
            return False
        if self.property_name and self.property_name.casefold() not in prop.name.casefold():
            return False
        if not self.category_matches(prop.category_name):
            return False
        return any(self.room_matches(room) for room in prop.rooms)

    def as_filter_data(self) -> dict:
        """Query data understood by ``PropertySearchFilterSet``."""
        data = {"city_id": self.city_id, "guests": self.guests}
        if self.property_name:
            data["name"] = self.property_name
        if self.category_terms:
            data["category_name"] = ",".join(self.category_terms)
        return data
