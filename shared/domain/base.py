"""
Base Domain Classes

This module provides the foundational building blocks shared by the domain
layers of every app:
- ValueObject: Immutable objects compared by value
- Projection: Immutable read models loaded from the store for one request
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


@dataclass(frozen=True)
class Projection(ABC):
    """
    Base class for read projections

    A projection is the exact shape a store query returns for one use case.
    It is immutable and lives only for the duration of a request; the domain
    never writes it back.
    """
    id: int
