"""
Validation helpers for coordinates, codes and search parameters.

Every function is a pure predicate returning a ValidationResult. A result can
be valid and still carry a warning (e.g. "near region boundary"); warnings
are advisory and must never abort the calling operation.
"""
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .config import DEFAULT_GRID, DEFAULT_REGION
from .constants import (
    BOUNDARY_BUFFER_DEGREES,
    CODE_LENGTH,
    FORMAT_SEPARATOR,
    GRID_SIZE_METERS,
    LOW_PRECISION_THRESHOLD,
    MAX_NEIGHBOR_RADIUS,
    MAX_SEARCH_RADIUS_METERS,
)
from .domain import BoundingBox, Coordinate

# Error messages
INVALID_CODE_EMPTY = "DIGIPIN code cannot be empty"
INVALID_CODE_LENGTH = "DIGIPIN code must be exactly {length} characters"
INVALID_CODE_CHARACTERS = "DIGIPIN code contains invalid characters"
INVALID_LATITUDE = "Latitude must be between -90 and 90"
INVALID_LONGITUDE = "Longitude must be between -180 and 180"
COORDINATE_OUT_OF_BOUNDS = "Coordinate is outside the DIGIPIN region"
NEGATIVE_RADIUS = "Radius must be positive"
EMPTY_COORDINATE_LIST = "Coordinate list cannot be empty"

# Warning messages
NEAR_BOUNDARY_WARNING = (
    "Coordinate is near the region boundary, some nearby DIGIPINs might be unavailable"
)
RADIUS_CAPPED_WARNING = (
    f"Radius will be limited to maximum {MAX_NEIGHBOR_RADIUS} grid cells for performance reasons"
)
LARGE_DISTANCE_WARNING = "Very large radius may result in incomplete results due to grid cell limits"
SMALL_DISTANCE_WARNING = (
    f"Radius smaller than grid size ({GRID_SIZE_METERS}m) may not find any results"
)
LOW_PRECISION_WARNING = "Low precision level will result in large grid areas"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation check."""
    valid: bool
    error: Optional[str] = None
    warning: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


OK = ValidationResult(valid=True)


def _fail(message: str) -> ValidationResult:
    return ValidationResult(valid=False, error=message)


def _warn(message: str) -> ValidationResult:
    return ValidationResult(valid=True, warning=message)


def validate_coordinate(latitude: float, longitude: float) -> ValidationResult:
    """
    Check latitude/longitude against their global ranges.

    NaN fails both range checks.
    """
    if not -90.0 <= latitude <= 90.0:
        return _fail(f"{INVALID_LATITUDE}, got {latitude}")
    if not -180.0 <= longitude <= 180.0:
        return _fail(f"{INVALID_LONGITUDE}, got {longitude}")
    return OK


def validate_code(code: str, length: int = CODE_LENGTH, alphabet: str = DEFAULT_GRID.alphabet) -> ValidationResult:
    """
    Check a code's length and characters.

    Display separators ("-") are stripped first and are the only
    non-alphabet characters tolerated.

    Args:
        code: Raw or formatted code
        length: Expected number of symbols (the codec's precision level)
        alphabet: Allowed symbols

    Returns:
        ValidationResult with a length or character error if invalid
    """
    if code is None or not code.strip():
        return _fail(INVALID_CODE_EMPTY)

    clean = code.replace(FORMAT_SEPARATOR, "")
    if len(clean) != length:
        return _fail(f"{INVALID_CODE_LENGTH.format(length=length)}, got {len(clean)}")

    invalid = sorted({char for char in clean if char not in alphabet})
    if invalid:
        return _fail(f"{INVALID_CODE_CHARACTERS}: {', '.join(invalid)}")

    return OK


def is_within_region(coordinate: Coordinate, region: BoundingBox = DEFAULT_REGION) -> bool:
    """True if the coordinate lies inside the region (edges included)."""
    return region.contains(coordinate)


def validate_within_region(coordinate: Coordinate, region: BoundingBox = DEFAULT_REGION) -> ValidationResult:
    """
    Check that a coordinate is inside the encodable region.

    Points within BOUNDARY_BUFFER_DEGREES of an edge are valid but get a
    warning, since some of their neighbors fall outside the region.
    """
    range_check = validate_coordinate(coordinate.latitude, coordinate.longitude)
    if not range_check.valid:
        return range_check

    if not is_within_region(coordinate, region):
        return _fail(f"{COORDINATE_OUT_OF_BOUNDS}: {coordinate}")

    buffer = BOUNDARY_BUFFER_DEGREES
    if (coordinate.latitude > region.northeast.latitude - buffer or
            coordinate.latitude < region.southwest.latitude + buffer or
            coordinate.longitude > region.northeast.longitude - buffer or
            coordinate.longitude < region.southwest.longitude + buffer):
        return _warn(NEAR_BOUNDARY_WARNING)

    return OK


def validate_radius(radius: int) -> ValidationResult:
    """Validate a neighbor radius expressed in grid cells."""
    if radius <= 0:
        return _fail(f"{NEGATIVE_RADIUS}, got {radius}")
    if radius > MAX_NEIGHBOR_RADIUS:
        return _warn(RADIUS_CAPPED_WARNING)
    return OK


def validate_distance_radius(radius_meters: float) -> ValidationResult:
    """Validate a search radius in meters."""
    if math.isnan(radius_meters) or radius_meters <= 0.0:
        return _fail(f"{NEGATIVE_RADIUS} in meters, got {radius_meters}")
    if math.isinf(radius_meters):
        return _fail(f"Radius must be finite, got {radius_meters}")
    if radius_meters > MAX_SEARCH_RADIUS_METERS:
        return _warn(LARGE_DISTANCE_WARNING)
    if radius_meters < GRID_SIZE_METERS:
        return _warn(SMALL_DISTANCE_WARNING)
    return OK


def validate_precision_level(precision: int) -> ValidationResult:
    if precision < 1 or precision > CODE_LENGTH:
        return _fail(f"Precision must be between 1 and {CODE_LENGTH}, got {precision}")
    if precision < LOW_PRECISION_THRESHOLD:
        return _warn(LOW_PRECISION_WARNING)
    return OK


def validate_coordinate_list(points: Iterable[Tuple[float, float]]) -> ValidationResult:
    """Validate a batch of (lat, lon) pairs, reporting the first bad index."""
    points = list(points)
    if not points:
        return _fail(EMPTY_COORDINATE_LIST)

    for index, (latitude, longitude) in enumerate(points):
        check = validate_coordinate(latitude, longitude)
        if not check.valid:
            return _fail(f"Invalid coordinate at index {index}: {check.error}")

    return OK
