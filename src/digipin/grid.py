"""
DIGIPIN grid codec.

The region is split into a 4x4 grid, the cell containing the point is
selected, and the process repeats inside that cell once per level. Each
level contributes one symbol, so a 10-symbol code pins a cell of roughly
3.8m x 3.8m.

Rows run north to south (row 0 is the northernmost band), columns west to
east. A symbol's position in the alphabet is row * 4 + col.
"""
import logging
import math
from typing import Tuple

from .config import DEFAULT_GRID, GridSpec
from .constants import CODE_LENGTH, FORMAT_SEPARATOR, GRID_DIVISIONS
from .domain import BoundingBox, Code, Coordinate, Outcome
from .exceptions import InvalidFormatError, OutOfBoundsError
from .validation import validate_code, validate_within_region

logger = logging.getLogger(__name__)

_LAST = GRID_DIVISIONS - 1


def _clamp(index: int) -> int:
    # Guards float edge cases on the region boundary (and out-of-region
    # points when validation is disabled)
    return min(max(index, 0), _LAST)


def encode_symbols(latitude: float, longitude: float,
                   grid: GridSpec = DEFAULT_GRID, precision: int = CODE_LENGTH) -> str:
    """
    Run the subdivision loop and return the raw symbol string.

    No validation happens here: points outside the region are clamped onto
    the nearest edge cell.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        grid: Alphabet and region to encode against
        precision: Number of levels (= symbols) to produce

    Returns:
        Symbol string of length `precision`
    """
    lat_min = grid.region.southwest.latitude
    lat_max = grid.region.northeast.latitude
    lon_min = grid.region.southwest.longitude
    lon_max = grid.region.northeast.longitude

    symbols = []
    for _ in range(precision):
        lat_div = (lat_max - lat_min) / GRID_DIVISIONS
        lon_div = (lon_max - lon_min) / GRID_DIVISIONS

        # Row is inverted so row 0 is the northern band
        row = _clamp(_LAST - math.floor((latitude - lat_min) / lat_div))
        col = _clamp(math.floor((longitude - lon_min) / lon_div))

        symbols.append(grid.symbol_at(row, col))

        # Narrow to the selected cell. lat_max must use the old lat_min,
        # lon_max the new lon_min.
        lat_max = lat_min + lat_div * (GRID_DIVISIONS - row)
        lat_min = lat_min + lat_div * (_LAST - row)
        lon_min = lon_min + lon_div * col
        lon_max = lon_min + lon_div

    return "".join(symbols)


def decode_symbols(code: str, grid: GridSpec = DEFAULT_GRID) -> Tuple[Coordinate, BoundingBox]:
    """
    Walk the symbols back down the grid and return (center, cell).

    Separators are stripped first. Any other character outside the alphabet
    raises InvalidFormatError since no cell can be derived for it.
    """
    lat_min = grid.region.southwest.latitude
    lat_max = grid.region.northeast.latitude
    lon_min = grid.region.southwest.longitude
    lon_max = grid.region.northeast.longitude

    for symbol in code.replace(FORMAT_SEPARATOR, ""):
        position = grid.position_of(symbol)
        if position is None:
            raise InvalidFormatError(code, f"invalid character '{symbol}'")
        row, col = position

        lat_div = (lat_max - lat_min) / GRID_DIVISIONS
        lon_div = (lon_max - lon_min) / GRID_DIVISIONS

        lat_min, lat_max = lat_max - lat_div * (row + 1), lat_max - lat_div * row
        lon_min, lon_max = lon_min + lon_div * col, lon_min + lon_div * (col + 1)

    center = Coordinate((lat_min + lat_max) / 2, (lon_min + lon_max) / 2)
    box = BoundingBox.from_edges(south=lat_min, west=lon_min, north=lat_max, east=lon_max)
    return center, box


def _build_code(symbols: str, grid: GridSpec) -> Code:
    center, box = decode_symbols(symbols, grid)
    return Code(code=symbols, center_coordinate=center, bounding_box=box)


def encode(coordinate: Coordinate, grid: GridSpec = DEFAULT_GRID,
           precision: int = CODE_LENGTH, validate: bool = True) -> Outcome[Code]:
    """
    Convert a coordinate to its DIGIPIN cell.

    The returned Code's center and box are derived by decoding the produced
    symbols, so encode and decode always agree on the cell.

    Args:
        coordinate: Point to encode
        grid: Alphabet and region
        precision: Number of levels
        validate: When False, out-of-region points are clamped instead of rejected

    Returns:
        Outcome with the Code and any boundary warning

    Raises:
        OutOfBoundsError: If validate is set and the point is outside the region
    """
    warning = None
    if validate:
        check = validate_within_region(coordinate, grid.region)
        if not check.valid:
            raise OutOfBoundsError(coordinate, grid.region)
        warning = check.warning

    symbols = encode_symbols(coordinate.latitude, coordinate.longitude, grid, precision)
    logger.debug("Encoded %s -> %s", coordinate, symbols)

    outcome = Outcome(_build_code(symbols, grid))
    if warning:
        logger.warning("%s: %s", coordinate, warning)
    return outcome.with_warning(warning)


def decode(code: str, grid: GridSpec = DEFAULT_GRID,
           precision: int = CODE_LENGTH, validate: bool = True) -> Outcome[Code]:
    """
    Convert a DIGIPIN code (raw or hyphenated) back to its cell.

    Args:
        code: Code string, e.g. "FC98J327K4" or "FC9-8J3-27K4"
        grid: Alphabet and region
        precision: Expected number of symbols when validating
        validate: When False, codes of any length are accepted

    Returns:
        Outcome with the Code (separators removed)

    Raises:
        InvalidFormatError: Wrong length (when validating) or a character
            outside the alphabet
    """
    if validate:
        check = validate_code(code, precision, grid.alphabet)
        if not check.valid:
            raise InvalidFormatError(code, check.error)

    symbols = code.replace(FORMAT_SEPARATOR, "")
    decoded = _build_code(symbols, grid)
    logger.debug("Decoded %s -> %s", symbols, decoded.center_coordinate)
    return Outcome(decoded)


def code_to_latlon(code: str, grid: GridSpec = DEFAULT_GRID) -> Tuple[float, float]:
    """
    Convert a code back to the (lat, lon) of its cell center.

    Returns:
        Tuple of (lat, lon)
    """
    center, _ = decode_symbols(code, grid)
    return center.latitude, center.longitude
