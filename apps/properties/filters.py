"""FilterSet definitions for property search."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .domain.predicates import SearchPredicate, split_category_terms
from .models import Property


class PropertySearchFilterSet(django_filters.FilterSet):
    """
    Translates a ``SearchPredicate`` into ORM filters.

    ``city_id`` and ``guests`` are mandatory in a search; name and category
    are optional.
    """

    city_id = django_filters.NumberFilter(field_name="city_id", lookup_expr="exact")
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    guests = django_filters.NumberFilter(method="filter_guests")
    # CSV of category names
    category_name = django_filters.CharFilter(method="filter_category_name")

    class Meta:
        model = Property
        fields: list[str] = []

    @classmethod
    def for_predicate(cls, predicate: SearchPredicate, queryset=None):  # type: ignore
        return cls(data=predicate.as_filter_data(), queryset=queryset)

    def filter_guests(self, queryset, name, value):  # type: ignore
        # Both conditions must hold for the same room
        return queryset.filter(
            rooms__max_guests__gte=int(value),
            rooms__quantity__gt=0,
        ).distinct()

    def filter_category_name(self, queryset, name, value):  # type: ignore
        terms = split_category_terms(value)
        if not terms:
            return queryset
        if len(terms) == 1:
            return queryset.filter(category__name__icontains=terms[0])
        # Several categories: case-insensitive exact membership
        exact = Q()
        for term in terms:
            exact |= Q(category__name__iexact=term)
        return queryset.filter(exact)
