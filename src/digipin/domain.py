"""
Immutable value types used throughout the codec.

Coordinate and BoundingBox validate themselves on construction. Code values
are only ever built by the grid codec (see grid.py), which guarantees that
the center and bounding box describe the cell the symbols denote.
"""
from dataclasses import dataclass, field
from typing import Generic, Optional, Tuple, TypeVar

from .constants import CODE_LENGTH, FORMAT_SEPARATOR, FORMAT_SPLITS
from .exceptions import InvalidCoordinateError

T = TypeVar("T")


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidCoordinateError(
                self.latitude, self.longitude,
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidCoordinateError(
                self.latitude, self.longitude,
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned lat/lon rectangle. Edges are inclusive."""
    southwest: Coordinate
    northeast: Coordinate

    def __post_init__(self):
        if self.southwest.latitude > self.northeast.latitude:
            raise InvalidCoordinateError(
                self.southwest.latitude, self.southwest.longitude,
                "Southwest latitude must be <= northeast latitude"
            )
        if self.southwest.longitude > self.northeast.longitude:
            raise InvalidCoordinateError(
                self.southwest.latitude, self.southwest.longitude,
                "Southwest longitude must be <= northeast longitude"
            )

    @classmethod
    def from_edges(cls, south: float, west: float, north: float, east: float) -> "BoundingBox":
        return cls(Coordinate(south, west), Coordinate(north, east))

    def center(self) -> Coordinate:
        return Coordinate(
            (self.southwest.latitude + self.northeast.latitude) / 2,
            (self.southwest.longitude + self.northeast.longitude) / 2,
        )

    def contains(self, point: Coordinate) -> bool:
        return (self.southwest.latitude <= point.latitude <= self.northeast.latitude and
                self.southwest.longitude <= point.longitude <= self.northeast.longitude)

    def width(self) -> float:
        """Longitude span in degrees."""
        return self.northeast.longitude - self.southwest.longitude

    def height(self) -> float:
        """Latitude span in degrees."""
        return self.northeast.latitude - self.southwest.latitude

    def __str__(self) -> str:
        return f"BoundingBox(SW={self.southwest}, NE={self.northeast})"


@dataclass(frozen=True)
class Code:
    """
    A DIGIPIN code together with the cell it denotes.

    Attributes:
        code: Symbol string (no separators)
        center_coordinate: Midpoint of bounding_box
        bounding_box: The exact grid cell
    """
    code: str
    center_coordinate: Coordinate
    bounding_box: BoundingBox

    @property
    def precision(self) -> int:
        """Number of subdivision levels in this code."""
        return len(self.code)

    def formatted(self) -> str:
        """
        Display form with separators, e.g. "FC9-8J3-27K4".

        Only full-length codes are split; shorter codes come back as-is.
        """
        if len(self.code) != CODE_LENGTH:
            return self.code
        first, second = FORMAT_SPLITS
        return FORMAT_SEPARATOR.join(
            (self.code[:first], self.code[first:second], self.code[second:])
        )

    def __str__(self) -> str:
        return f"Digipin(code='{self.code}', center={self.center_coordinate})"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Return value paired with advisory warnings.

    Warnings never mean failure: callers that only care about the value
    can ignore them.
    """
    value: T
    warnings: Tuple[str, ...] = field(default=())

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def with_warning(self, message: Optional[str]) -> "Outcome[T]":
        """Return a copy with `message` appended (no-op for None)."""
        if not message:
            return self
        return Outcome(self.value, self.warnings + (message,))
