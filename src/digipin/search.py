"""
Neighbor enumeration and radius search on top of the grid codec.

Neighbors are found by stepping the decoded cell's center by whole cell
heights/widths and re-encoding each shifted point. Candidates that land
outside the region are skipped, never raised, so a search degrades to fewer
results near the region edge.

Invalid top-level arguments (non-positive radius) produce an empty result
with the validation error attached as a warning.
"""
import logging
import math
from typing import List, NamedTuple, Optional

from .config import DEFAULT_GRID, GridSpec
from .constants import CODE_LENGTH, MAX_NEIGHBOR_RADIUS
from .domain import Code, Coordinate, Outcome
from .geo import distance, grid_size_meters
from . import grid as codec
from .validation import (
    is_within_region,
    validate_coordinate,
    validate_distance_radius,
    validate_radius,
    validate_within_region,
)

logger = logging.getLogger(__name__)

CENTER_OUT_OF_REGION_WARNING = "Center coordinate is outside the DIGIPIN region"


class Candidate(NamedTuple):
    """A neighbor probe: either a code or the reason it was skipped."""
    code: Optional[Code]
    skipped: Optional[str] = None


def _probe(latitude: float, longitude: float, grid: GridSpec, precision: int) -> Candidate:
    if not validate_coordinate(latitude, longitude).valid:
        return Candidate(None, "invalid coordinate")

    point = Coordinate(latitude, longitude)
    if not is_within_region(point, grid.region):
        return Candidate(None, "outside region")

    symbols = codec.encode_symbols(latitude, longitude, grid, precision)
    center, box = codec.decode_symbols(symbols, grid)
    return Candidate(Code(code=symbols, center_coordinate=center, bounding_box=box))


def neighbor_cells(center: Code, radius: int = 1, grid: GridSpec = DEFAULT_GRID) -> List[Code]:
    """
    All cells within `radius` steps of `center`, excluding center itself.

    Offsets are visited south-to-north by latitude step, then west-to-east.
    The radius is capped at MAX_NEIGHBOR_RADIUS and must already be positive.

    Examples:
        radius=1: up to 8 cells
        radius=2: up to 24 cells
    """
    radius = min(radius, MAX_NEIGHBOR_RADIUS)
    step_lat = center.bounding_box.height()
    step_lon = center.bounding_box.width()
    origin = center.center_coordinate

    candidates = (
        _probe(origin.latitude + lat_offset * step_lat,
               origin.longitude + lon_offset * step_lon,
               grid, center.precision)
        for lat_offset in range(-radius, radius + 1)
        for lon_offset in range(-radius, radius + 1)
        if (lat_offset, lon_offset) != (0, 0)
    )

    neighbors = []
    skipped = 0
    for candidate in candidates:
        if candidate.code is None:
            skipped += 1
            continue
        neighbors.append(candidate.code)

    if skipped:
        logger.debug("Skipped %d neighbor candidates of %s", skipped, center.code)
    return neighbors


def get_neighbor_cells(code: str, radius: int = 1, grid: GridSpec = DEFAULT_GRID,
                       precision: int = CODE_LENGTH, validate: bool = True) -> Outcome[List[Code]]:
    """
    Get the cells surrounding a code.

    Args:
        code: DIGIPIN code (raw or hyphenated)
        radius: Number of cell rings (1 = immediate neighbors)
        grid: Alphabet and region
        precision: Expected code length when validating
        validate: Whether to validate the code and radius

    Returns:
        Outcome with the neighboring codes. A non-positive radius yields an
        empty list and the validation error as a warning.

    Raises:
        InvalidFormatError: If the code itself is malformed
    """
    check = validate_radius(radius)
    if not check.valid:
        logger.warning("Neighbor search rejected: %s", check.error)
        return Outcome([], (check.error,))

    center = codec.decode(code, grid, precision, validate).value
    outcome = Outcome(neighbor_cells(center, radius, grid))
    return outcome.with_warning(check.warning)


def find_codes_in_radius(center: Coordinate, radius_meters: float, grid: GridSpec = DEFAULT_GRID,
                         precision: int = CODE_LENGTH) -> Outcome[List[Code]]:
    """
    Find every cell whose center lies within `radius_meters` of `center`.

    Process:
    1. Encode the center (outside the region -> empty result + warning)
    2. Convert the radius to a number of grid cells, capped at 100
    3. Collect the neighbors in that many rings plus the center cell
    4. Keep the ones whose center is within the radius

    Args:
        center: Search origin
        radius_meters: Search radius in meters
        grid: Alphabet and region
        precision: Code length of the returned cells

    Returns:
        Outcome with the matching codes and any advisory warnings
    """
    check = validate_distance_radius(radius_meters)
    if not check.valid:
        logger.warning("Radius search rejected: %s", check.error)
        return Outcome([], (check.error,))

    warnings = [check.warning] if check.warning else []

    region_check = validate_within_region(center, grid.region)
    if not region_check.valid:
        logger.warning("Radius search around %s: %s", center, CENTER_OUT_OF_REGION_WARNING)
        return Outcome([], tuple(warnings + [CENTER_OUT_OF_REGION_WARNING]))
    if region_check.warning:
        warnings.append(region_check.warning)

    center_code = codec.encode(center, grid, precision, validate=False).value
    cell_size = grid_size_meters(center_code)

    grid_radius = math.ceil(radius_meters / cell_size)
    safe_radius = min(grid_radius, MAX_NEIGHBOR_RADIUS)
    if safe_radius < grid_radius:
        capped = f"Search radius limited to {safe_radius * cell_size:.0f}m for performance"
        logger.warning(capped)
        warnings.append(capped)

    candidates = neighbor_cells(center_code, safe_radius, grid) + [center_code]
    matches = [
        candidate for candidate in candidates
        if distance(center, candidate.center_coordinate) <= radius_meters
    ]

    logger.debug("Radius search %.1fm around %s: %d of %d cells",
                 radius_meters, center, len(matches), len(candidates))
    return Outcome(matches, tuple(warnings))
