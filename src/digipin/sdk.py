"""
DigipinCodec: the public entry point.

Basic usage:
    codec = DigipinCodec()
    code = codec.encode(28.6139, 77.2090)
    print(code.formatted(), codec.precision_description(code))

Every operation also has an *_outcome variant that returns the value
together with its advisory warnings (near region boundary, radius capped,
...). The plain variants drop the warnings.

A codec holds no mutable state and can be shared between threads.
"""
import logging
from typing import Iterable, List, Optional, Tuple

from . import geo
from . import grid as codec
from . import search
from . import metrics
from .config import DEFAULT_GRID, CodecConfig, GridSpec
from .domain import Code, Coordinate, Outcome
from .exceptions import DigipinError, InvalidFormatError, OutOfBoundsError
from .validation import validate_code, validate_coordinate, validate_coordinate_list

logger = logging.getLogger(__name__)


class DigipinCodec:
    """
    Encode/decode DIGIPIN codes and run spatial queries over them.

    Args:
        config: Validation and precision options (defaults to CodecConfig())
        grid: Alphabet and region bounds (defaults to the official DIGIPIN grid)
    """

    def __init__(self, config: Optional[CodecConfig] = None, grid: GridSpec = DEFAULT_GRID):
        self.config = config or CodecConfig()
        self.grid = grid

    @classmethod
    def from_env(cls) -> "DigipinCodec":
        return cls(CodecConfig.from_env())

    @property
    def precision(self) -> int:
        return self.config.precision_level

    def _record(self, operation: str, outcome: Outcome) -> Outcome:
        metrics.codec_operations_total.labels(operation=operation, status="success").inc()
        if outcome.warnings:
            metrics.codec_warnings_total.labels(operation=operation).inc(len(outcome.warnings))
        return outcome

    def _failed(self, operation: str) -> None:
        metrics.codec_operations_total.labels(operation=operation, status="error").inc()

    # Encoding / decoding

    def encode_outcome(self, coordinate: Coordinate) -> Outcome[Code]:
        try:
            outcome = codec.encode(coordinate, self.grid, self.precision, self.config.validation_enabled)
        except OutOfBoundsError:
            self._failed("encode")
            raise
        return self._record("encode", outcome)

    def encode_coordinate(self, coordinate: Coordinate) -> Code:
        """
        Raises:
            OutOfBoundsError: If validation is enabled and the point is outside the region
        """
        return self.encode_outcome(coordinate).value

    def encode(self, latitude: float, longitude: float) -> Code:
        """
        Encode a lat/lon pair.

        Raises:
            InvalidCoordinateError: If lat/lon are outside their global ranges
            OutOfBoundsError: If validation is enabled and the point is outside the region
        """
        return self.encode_coordinate(Coordinate(latitude, longitude))

    def decode_outcome(self, code: str) -> Outcome[Code]:
        try:
            outcome = codec.decode(code, self.grid, self.precision, self.config.validation_enabled)
        except InvalidFormatError:
            self._failed("decode")
            raise
        return self._record("decode", outcome)

    def decode(self, code: str) -> Code:
        """
        Decode a code (raw or hyphenated).

        Raises:
            InvalidFormatError: Wrong length or a character outside the alphabet
        """
        return self.decode_outcome(code).value

    def encode_many(self, points: Iterable[Tuple[float, float]]) -> List[Outcome[Optional[Code]]]:
        """
        Encode a batch of (lat, lon) pairs.

        Bad points don't abort the batch: each one yields an Outcome with
        value None and the reason as its warning.

        Raises:
            DigipinError: If the batch is empty
        """
        points = list(points)
        check = validate_coordinate_list(points)
        if not points:
            raise DigipinError(check.error)
        if not check.valid:
            logger.warning("Batch encode: %s", check.error)

        results = []
        for latitude, longitude in points:
            coordinate_check = validate_coordinate(latitude, longitude)
            if not coordinate_check.valid:
                results.append(Outcome(None, (coordinate_check.error,)))
                continue
            try:
                results.append(self.encode_outcome(Coordinate(latitude, longitude)))
            except OutOfBoundsError as e:
                results.append(Outcome(None, (str(e),)))
        return results

    # Predicates

    def is_within_region(self, coordinate: Coordinate) -> bool:
        return self.grid.region.contains(coordinate)

    def is_valid_code(self, code: str) -> bool:
        return validate_code(code, self.precision, self.grid.alphabet).valid

    # Search

    def neighbors_outcome(self, code: str, radius: int = 1) -> Outcome[List[Code]]:
        outcome = search.get_neighbor_cells(
            code, radius, self.grid, self.precision, self.config.validation_enabled
        )
        metrics.search_results_count.labels(operation="neighbors").observe(len(outcome.value))
        return self._record("neighbors", outcome)

    def neighbors(self, code: str, radius: int = 1) -> List[Code]:
        """
        Cells surrounding `code` within `radius` rings (capped at 100).

        A non-positive radius returns an empty list.
        """
        return self.neighbors_outcome(code, radius).value

    def find_codes_in_radius_outcome(self, center: Coordinate, radius_meters: float) -> Outcome[List[Code]]:
        outcome = search.find_codes_in_radius(center, radius_meters, self.grid, self.precision)
        metrics.search_results_count.labels(operation="radius").observe(len(outcome.value))
        return self._record("radius", outcome)

    def find_codes_in_radius(self, center: Coordinate, radius_meters: float) -> List[Code]:
        """Cells whose centers lie within `radius_meters` of `center`."""
        return self.find_codes_in_radius_outcome(center, radius_meters).value

    # Geo math

    def distance(self, a: Coordinate, b: Coordinate) -> float:
        return geo.distance(a, b)

    def grid_size_meters(self, code: Code) -> float:
        return geo.grid_size_meters(code)

    def area_square_meters(self, code: Code) -> float:
        return geo.area_square_meters(code)

    def precision_description(self, code: Code) -> str:
        return geo.precision_description(code)

    def maps_url(self, code: Code) -> str:
        return geo.maps_url(code)
