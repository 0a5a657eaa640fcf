# AreaMethod SDK - Points
# Copyright (c) 2024 AreaMethod Contributors. All rights reserved.

"""
Point identities consumed by the expression engine.

The engine never computes with coordinates. A point is an opaque identity
with a display label: two points are the same only if they are the same
object, whatever their labels. Labels are used for printing and for the
canonical ordering of expressions, so a construction should keep them
unique.

Example:
    >>> labels = LabelAllocator()
    >>> a = FreePoint('A')
    >>> b = FreePoint.auto(labels)
    >>> b.label
    'AM0'
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Tuple


# Predicate deciding whether a point is free in the current construction
FreePredicate = Callable[['Point'], bool]


@dataclass(frozen=True, eq=False)
class Point:
    """A point identity with a display label."""
    label: str

    def __post_init__(self):
        if not isinstance(self.label, str):
            raise TypeError(f"Point label must be a string, got {type(self.label).__name__}")
        if not self.label:
            raise ValueError("Point label cannot be empty")

    @property
    def is_free(self) -> bool:
        return False

    def __repr__(self) -> str:
        return self.label


@dataclass(frozen=True, eq=False, repr=False)
class FreePoint(Point):
    """A point not defined in terms of others."""

    @property
    def is_free(self) -> bool:
        return True

    @classmethod
    def auto(cls, allocator: LabelAllocator) -> FreePoint:
        """Create a free point with a label drawn from ``allocator``."""
        return cls(allocator.next_label())


@dataclass(frozen=True, eq=False, repr=False)
class ConstructedPoint(Point):
    """A point defined by a construction over ``parents``."""
    parents: Tuple[Point, ...] = ()

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, 'parents', tuple(self.parents))


class LabelAllocator:
    """
    Hands out fresh point labels of the form ``<prefix><n>``.

    Each construction owns its allocator, so independent constructions
    never share a counter.
    """

    def __init__(self, prefix: str = "AM", start: int = 0):
        if not prefix:
            raise ValueError("Label prefix cannot be empty")
        self.prefix = prefix
        self._next = start

    def next_label(self) -> str:
        label = f"{self.prefix}{self._next}"
        self._next += 1
        return label

    def __repr__(self) -> str:
        return f"LabelAllocator(prefix={self.prefix!r}, next={self._next})"


def is_free_point(point: Point) -> bool:
    """Default free/derived classification: trust the point's own flag."""
    return point.is_free
