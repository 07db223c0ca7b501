"""
Unit tests for grid module (DIGIPIN encode/decode).
"""
import pytest

from digipin.config import DEFAULT_GRID, GridSpec
from digipin.constants import ALPHABET, CODE_LENGTH
from digipin.domain import BoundingBox, Coordinate
from digipin.exceptions import InvalidFormatError, OutOfBoundsError
from digipin.geo import distance
from digipin.grid import code_to_latlon, decode, decode_symbols, encode, encode_symbols

DELHI = Coordinate(28.6139, 77.2090)

SAMPLE_POINTS = [
    Coordinate(28.6139, 77.2090),  # Delhi
    Coordinate(19.0760, 72.8777),  # Mumbai
    Coordinate(12.9716, 77.5946),  # Bangalore
    Coordinate(13.0827, 80.2707),  # Chennai
    Coordinate(27.1751, 78.0421),  # Taj Mahal
    Coordinate(8.0883, 77.5385),   # Kanyakumari
    Coordinate(34.0837, 74.7973),  # Srinagar
]


@pytest.mark.unit
class TestEncode:
    """Test suite for encode function."""

    def test_encode_valid_coordinate(self):
        """Test encoding a point inside the region."""
        code = encode(DELHI).value

        assert isinstance(code.code, str)
        assert len(code.code) == CODE_LENGTH
        assert all(symbol in ALPHABET for symbol in code.code)

    def test_encode_out_of_bounds(self):
        """Test that (0, 0) is rejected."""
        with pytest.raises(OutOfBoundsError) as exc_info:
            encode(Coordinate(0.0, 0.0))

        assert exc_info.value.coordinate == Coordinate(0.0, 0.0)
        assert exc_info.value.bounds == DEFAULT_GRID.region

    def test_encode_same_location_same_code(self):
        """Test that encoding is deterministic."""
        assert encode(DELHI).value == encode(DELHI).value

    def test_encode_first_levels(self):
        """Test the first two symbols for Delhi by hand.

        Level 1: 9 degree cells, Delhi is row 1 col 1 -> '3'
        Level 2: 2.25 degree cells, row 0 col 2 -> '9'
        """
        assert encode(DELHI).value.code.startswith("39")

    def test_encode_precision_one(self):
        """Test a single-level code and its cell."""
        code = encode(DELHI, precision=1).value

        assert code.code == "3"
        assert code.bounding_box == BoundingBox.from_edges(south=20.5, west=72.5, north=29.5, east=81.5)
        assert code.center_coordinate == Coordinate(25.0, 77.0)

    def test_encode_northeast_corner_clamps(self):
        """Test that the region's NE corner clamps to the last row/col."""
        assert encode(Coordinate(38.5, 99.5)).value.code == "8" * CODE_LENGTH

    def test_encode_southwest_corner(self):
        """Test that the region's SW corner maps to the bottom-left cell."""
        assert encode(Coordinate(2.5, 63.5)).value.code == "L" * CODE_LENGTH

    def test_encode_near_boundary_warns(self):
        """Test that points near the region edge carry a warning."""
        outcome = encode(Coordinate(38.45, 80.0))

        assert outcome.has_warnings
        assert "near the region boundary" in outcome.warnings[0]

    def test_encode_interior_no_warning(self):
        """Test that interior points carry no warnings."""
        assert encode(DELHI).warnings == ()

    def test_encode_without_validation_clamps(self):
        """Test that disabling validation clamps out-of-region points."""
        code = encode(Coordinate(0.0, 0.0), validate=False).value
        assert code.code == "L" * CODE_LENGTH

    def test_encode_symbols_matches_encode(self):
        """Test the raw loop agrees with encode."""
        assert encode_symbols(DELHI.latitude, DELHI.longitude) == encode(DELHI).value.code


@pytest.mark.unit
class TestDecode:
    """Test suite for decode function."""

    def test_decode_valid_code(self):
        """Test decoding an encoded point returns the same code."""
        encoded = encode(DELHI).value
        decoded = decode(encoded.code).value

        assert decoded == encoded

    def test_decode_center_close_to_input_point(self):
        """Test that the decoded center is within 1m of the input."""
        decoded = decode(encode(DELHI).value.code).value
        assert distance(DELHI, decoded.center_coordinate) < 1.0

    def test_decode_invalid_length(self):
        """Test that a short code is rejected citing its length."""
        with pytest.raises(InvalidFormatError) as exc_info:
            decode("123")

        assert "exactly 10 characters" in exc_info.value.reason
        assert exc_info.value.code == "123"

    def test_decode_invalid_characters(self):
        """Test that digits outside the alphabet are rejected."""
        with pytest.raises(InvalidFormatError) as exc_info:
            decode("1234567890")

        assert "invalid characters" in exc_info.value.reason

    def test_decode_lowercase_rejected(self):
        """Test that lowercase letters are not part of the alphabet."""
        with pytest.raises(InvalidFormatError):
            decode("fc98j327k4")

    def test_decode_formatted_code(self):
        """Test that display separators are stripped."""
        assert decode("FC9-8J3-27K4").value == decode("FC98J327K4").value

    def test_decode_formatted_code_returns_raw_symbols(self):
        """Test that the decoded code has no separators."""
        assert decode("FC9-8J3-27K4").value.code == "FC98J327K4"

    def test_decode_center_is_box_midpoint(self):
        """Test that center and bounding box are consistent."""
        code = decode("FC98J327K4").value
        assert code.center_coordinate == code.bounding_box.center()

    def test_decode_precision_mismatch(self):
        """Test that a 10-symbol code is rejected at precision 5."""
        with pytest.raises(InvalidFormatError):
            decode("FC98J327K4", precision=5)

    def test_decode_short_code_at_matching_precision(self):
        """Test that a 5-symbol code decodes at precision 5."""
        code = decode("FC98J", precision=5).value
        assert code.precision == 5

    def test_decode_without_validation_any_length(self):
        """Test that disabling validation accepts any length."""
        assert decode("39", validate=False).value.code == "39"

    def test_decode_without_validation_bad_character(self):
        """Test that unknown symbols still fail without validation."""
        with pytest.raises(InvalidFormatError) as exc_info:
            decode("39X", validate=False)

        assert "invalid character 'X'" in exc_info.value.reason

    def test_decode_symbols_precision_one(self):
        """Test decoding a single-level code by hand."""
        center, box = decode_symbols("3")

        assert center == Coordinate(25.0, 77.0)
        assert box.height() == 9.0
        assert box.width() == 9.0

    def test_code_to_latlon_returns_tuple(self):
        """Test that code_to_latlon returns (lat, lon) floats."""
        lat, lon = code_to_latlon("3")
        assert (lat, lon) == (25.0, 77.0)


@pytest.mark.unit
class TestRoundTrip:
    """Encode/decode must agree on the cell."""

    @pytest.mark.parametrize("point", SAMPLE_POINTS)
    def test_decoded_box_contains_point(self, point):
        """Test decode(encode(c)) contains c."""
        code = encode(point).value
        assert decode(code.code).value.bounding_box.contains(point)

    @pytest.mark.parametrize("code", ["FC98J327K4", "LMPT456K72", "3333333333", "9T5K2L8FJC"])
    def test_encode_center_reproduces_code(self, code):
        """Test encode(decode(code).center) == code."""
        center = decode(code).value.center_coordinate
        assert encode(center, validate=False).value.code == code

    @pytest.mark.parametrize("precision", range(1, CODE_LENGTH + 1))
    def test_length_matches_precision(self, precision):
        """Test every precision produces that many symbols."""
        code = encode(DELHI, precision=precision).value

        assert len(code.code) == precision
        assert all(symbol in ALPHABET for symbol in code.code)

    def test_coarser_code_is_prefix(self):
        """Test that lower precision codes are prefixes of the full code."""
        full = encode(DELHI).value.code
        for precision in range(1, CODE_LENGTH):
            assert full.startswith(encode(DELHI, precision=precision).value.code)


@pytest.mark.unit
class TestAlternateGrid:
    """The codec works over any injected region."""

    def test_custom_region(self):
        """Test encoding against a 16x16 degree region at the origin."""
        grid = GridSpec(region=BoundingBox.from_edges(south=0.0, west=0.0, north=16.0, east=16.0))
        code = encode(Coordinate(15.9, 0.1), grid=grid, precision=1).value

        assert code.code == "F"
        assert code.center_coordinate == Coordinate(14.0, 2.0)

    def test_custom_alphabet(self):
        """Test that a different alphabet changes the symbols only."""
        grid = GridSpec(alphabet="ABCDEFGHIJKLMNOP")
        code = encode(DELHI, grid=grid, precision=1).value

        # row 1, col 1
        assert code.code == "F"
        assert code.center_coordinate == Coordinate(25.0, 77.0)
