"""
Property Queries

Read-side use cases for properties. The service receives the store in its
constructor and never reaches for the ORM on its own.

Queries:
- search / search_page: properties in a city with eligible rooms for a stay
- detail: one property with its eligible rooms for a stay
- calendar: per-day availability of every room for a month
- categories: global categories plus a tenant's private ones
- list_owned / owned_detail / list_owned_rooms: owner views, no availability
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID
import logging

from shared.domain.value_objects import DateRange
from apps.properties.domain.availability import resolve
from apps.properties.domain.exceptions import (
    AuthenticationRequired,
    EmptyResult,
    NoAvailableRooms,
    PropertyNotFound,
)
from apps.properties.domain.predicates import SearchPredicate, split_category_terms
from apps.properties.domain.projections import (
    CategorySnapshot,
    OwnedProperty,
    OwnedRoom,
    PropertyWithRooms,
)
from apps.properties.domain.shaping import (
    PaginatedResult,
    ProcessedProperty,
    ProcessedRoom,
    build_pagination,
    paginate,
    shape_calendar,
    sort_properties,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 5


# ===== Criteria =====

@dataclass(frozen=True)
class SearchCriteria:
    """Validated search parameters"""
    city_id: int
    check_in: date
    check_out: date
    guests: int
    page: int = 1
    property_name: Optional[str] = None
    category_name: Optional[str] = None  # CSV of names
    sort_by: Optional[str] = None
    sort_order: str = 'asc'

    @property
    def window(self) -> DateRange:
        return DateRange(self.check_in, self.check_out)


@dataclass(frozen=True)
class DetailCriteria:
    property_id: int
    check_in: date
    check_out: date
    guests: int

    @property
    def window(self) -> DateRange:
        return DateRange(self.check_in, self.check_out)


@dataclass(frozen=True)
class CalendarCriteria:
    property_id: int
    year: int
    month: int


@dataclass(frozen=True)
class SearchPage:
    """One page of search results and the categories of all matching properties"""
    result: PaginatedResult
    categories: Tuple[str, ...] = ()


# ===== Service =====

class PropertyQueryService:
    """
    Property Aggregator

    Builds the predicate, fetches candidates through the store, resolves
    availability per room and assembles ``ProcessedProperty`` records.
    """

    def __init__(
        self,
        store,
        search_page_size: int = DEFAULT_PAGE_SIZE,
        owned_page_size: int = DEFAULT_PAGE_SIZE,
        rooms_page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.store = store
        self.search_page_size = search_page_size
        self.owned_page_size = owned_page_size
        self.rooms_page_size = rooms_page_size

    @staticmethod
    def build_predicate(criteria: SearchCriteria) -> SearchPredicate:
        return SearchPredicate(
            city_id=criteria.city_id,
            guests=criteria.guests,
            window=criteria.window,
            property_name=criteria.property_name or None,
            category_terms=split_category_terms(criteria.category_name),
        )

    def _process(
        self, prop: PropertyWithRooms, window: DateRange, guests: int
    ) -> Optional[ProcessedProperty]:
        """Resolve every room; None when no room is eligible."""
        rooms = []
        for room in prop.rooms:
            availability = resolve(room, window, guests)
            if availability.is_listed:
                rooms.append(ProcessedRoom(room=room, availability=availability, window=window))
        if not rooms:
            return None
        return ProcessedProperty(
            id=prop.id,
            name=prop.name,
            location=prop.location,
            category_name=prop.category_name,
            main_picture=prop.main_picture,
            available_rooms=tuple(rooms),
            description=prop.description,
            city=prop.city,
            pictures=prop.pictures,
        )

    def search(self, criteria: SearchCriteria) -> List[ProcessedProperty]:
        """Matching properties with at least one eligible room, in store order."""
        predicate = self.build_predicate(criteria)
        candidates = self.store.find_properties_matching(predicate)

        processed = []
        for prop in candidates:
            item = self._process(prop, predicate.window, predicate.guests)
            if item is not None:
                processed.append(item)

        logger.info(
            f"Search city={criteria.city_id} {predicate.window} guests={criteria.guests}: "
            f"{len(candidates)} candidates, {len(processed)} with eligible rooms"
        )
        return processed

    def search_page(self, criteria: SearchCriteria) -> SearchPage:
        """
        Search, sort and paginate.

        Raises:
            EmptyResult: nothing matched
            PageOutOfRange: page past the last page
        """
        properties = sort_properties(self.search(criteria), criteria.sort_by, criteria.sort_order)
        if not properties:
            raise EmptyResult(criteria.page, self.search_page_size)

        result = paginate(properties, criteria.page, self.search_page_size)
        categories = tuple(dict.fromkeys(
            prop.category_name for prop in properties if prop.category_name
        ))
        return SearchPage(result=result, categories=categories)

    def detail(self, criteria: DetailCriteria) -> ProcessedProperty:
        """
        Raises:
            PropertyNotFound: no property with this id
            NoAvailableRooms: the property exists but no room is eligible
        """
        window = criteria.window
        prop = self.store.find_property_by_id(criteria.property_id, window, criteria.guests)
        if prop is None:
            logger.info(f"Detail: property {criteria.property_id} not found")
            raise PropertyNotFound(criteria.property_id)

        processed = self._process(prop, window, criteria.guests)
        if processed is None:
            logger.info(f"Detail: property {criteria.property_id} has no eligible rooms for {window}")
            raise NoAvailableRooms(criteria.property_id)

        logger.info(
            f"Detail: property {criteria.property_id}, "
            f"{processed.total_available_rooms} eligible rooms for {window}"
        )
        return processed

    def calendar(self, criteria: CalendarCriteria) -> dict:
        prop = self.store.find_property_for_calendar(criteria.property_id, criteria.year, criteria.month)
        if prop is None:
            raise PropertyNotFound(criteria.property_id)

        logger.info(
            f"Calendar: property {criteria.property_id}, {criteria.year}-{criteria.month:02d}, "
            f"{len(prop.rooms)} rooms"
        )
        return shape_calendar(prop, criteria.year, criteria.month)

    def categories(self, tenant_id: Optional[UUID] = None) -> List[CategorySnapshot]:
        categories = self.store.find_categories(tenant_id)
        logger.info(f"Categories for tenant {tenant_id}: {len(categories)}")
        return categories

    # ----- owner views -----

    def list_owned(self, tenant_id: Optional[UUID], page: int = 1) -> PaginatedResult[OwnedProperty]:
        if tenant_id is None:
            raise AuthenticationRequired()

        offset = (page - 1) * self.owned_page_size
        items, total = self.store.find_owned_properties(tenant_id, offset, self.owned_page_size)
        if total == 0:
            raise EmptyResult(page, self.owned_page_size, message="No properties found")

        pagination = build_pagination(total, page, self.owned_page_size)
        logger.info(f"Owned properties of {tenant_id}: page {page}/{pagination.total_pages}, total {total}")
        return PaginatedResult(data=list(items), pagination=pagination)

    def owned_detail(self, tenant_id: Optional[UUID], property_id: int) -> OwnedProperty:
        if tenant_id is None:
            raise AuthenticationRequired()

        prop = self.store.find_owned_property(tenant_id, property_id)
        if prop is None:
            raise PropertyNotFound(property_id)
        return prop

    def list_owned_rooms(self, tenant_id: Optional[UUID], page: int = 1) -> PaginatedResult[OwnedRoom]:
        if tenant_id is None:
            raise AuthenticationRequired()

        offset = (page - 1) * self.rooms_page_size
        items, total = self.store.find_owned_rooms(tenant_id, offset, self.rooms_page_size)
        if total == 0:
            raise EmptyResult(page, self.rooms_page_size, message="No rooms found")

        pagination = build_pagination(total, page, self.rooms_page_size)
        logger.info(f"Owned rooms of {tenant_id}: page {page}/{pagination.total_pages}, total {total}")
        return PaginatedResult(data=list(items), pagination=pagination)
