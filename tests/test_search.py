"""
Unit tests for search module (neighbors and radius search).
"""
from unittest.mock import patch

import pytest

from digipin.constants import CODE_LENGTH
from digipin.domain import Coordinate
from digipin.exceptions import InvalidFormatError
from digipin.geo import distance
from digipin.grid import decode, encode
from digipin.search import (
    CENTER_OUT_OF_REGION_WARNING,
    find_codes_in_radius,
    get_neighbor_cells,
    neighbor_cells,
)

DELHI = Coordinate(28.6139, 77.2090)


@pytest.fixture
def delhi_code():
    """Full-precision code for Delhi."""
    return encode(DELHI).value


@pytest.mark.unit
class TestGetNeighborCells:
    """Test suite for get_neighbor_cells function."""

    def test_neighbors_radius_1(self, delhi_code):
        """Test radius 1 returns the 8 surrounding cells."""
        neighbors = get_neighbor_cells(delhi_code.code, radius=1).value

        assert len(neighbors) == 8
        assert len({n.code for n in neighbors}) == 8
        assert delhi_code.code not in {n.code for n in neighbors}

    def test_neighbors_radius_2(self, delhi_code):
        """Test radius 2 returns the 24 surrounding cells."""
        neighbors = get_neighbor_cells(delhi_code.code, radius=2).value

        assert len(neighbors) == 24
        assert len({n.code for n in neighbors}) == 24

    def test_neighbors_default_radius(self, delhi_code):
        """Test default radius=1 parameter."""
        assert len(get_neighbor_cells(delhi_code.code).value) == 8

    def test_neighbors_grow_with_radius(self, delhi_code):
        """Test |neighbors(r=2)| >= |neighbors(r=1)|."""
        ring1 = get_neighbor_cells(delhi_code.code, radius=1).value
        ring2 = get_neighbor_cells(delhi_code.code, radius=2).value

        assert len(ring2) >= len(ring1)
        assert {n.code for n in ring1} <= {n.code for n in ring2}

    def test_neighbors_are_adjacent(self, delhi_code):
        """Test every radius-1 neighbor is one cell step away."""
        box = delhi_code.bounding_box
        for neighbor in get_neighbor_cells(delhi_code.code).value:
            lat_steps = (neighbor.center_coordinate.latitude - delhi_code.center_coordinate.latitude) / box.height()
            lon_steps = (neighbor.center_coordinate.longitude - delhi_code.center_coordinate.longitude) / box.width()

            assert round(abs(lat_steps)) <= 1
            assert round(abs(lon_steps)) <= 1
            assert len(neighbor.code) == CODE_LENGTH

    def test_neighbors_all_valid(self, delhi_code):
        """Test that every neighbor decodes back to itself."""
        for neighbor in get_neighbor_cells(delhi_code.code, radius=2).value:
            assert decode(neighbor.code).value == neighbor

    def test_neighbors_accepts_formatted_code(self, delhi_code):
        """Test that a hyphenated code works."""
        neighbors = get_neighbor_cells(delhi_code.formatted()).value
        assert len(neighbors) == 8

    def test_neighbors_at_region_corner(self):
        """Test the SW corner cell only has 3 in-region neighbors."""
        neighbors = get_neighbor_cells("L" * CODE_LENGTH).value
        assert len(neighbors) == 3

    def test_neighbors_zero_radius_empty(self, delhi_code):
        """Test radius 0 returns an empty list with the error as a warning."""
        outcome = get_neighbor_cells(delhi_code.code, radius=0)

        assert outcome.value == []
        assert outcome.warnings == ("Radius must be positive, got 0",)

    def test_neighbors_negative_radius_empty(self, delhi_code):
        """Test negative radius returns an empty list."""
        assert get_neighbor_cells(delhi_code.code, radius=-3).value == []

    def test_neighbors_invalid_code_raises(self):
        """Test that a malformed code is surfaced to the caller."""
        with pytest.raises(InvalidFormatError):
            get_neighbor_cells("123")

    def test_neighbors_radius_capped(self, delhi_code):
        """Test that a radius above the cap is limited and warned about."""
        with patch("digipin.search.MAX_NEIGHBOR_RADIUS", 2):
            outcome = get_neighbor_cells(delhi_code.code, radius=150)

        assert len(outcome.value) == 24
        assert "limited to maximum 100 grid cells" in outcome.warnings[0]

    def test_neighbor_cells_coarse_code(self):
        """Test neighbors of a level-1 cell stay at level 1."""
        center = decode("5", validate=False).value
        neighbors = neighbor_cells(center, 1)

        # '5' is row 2 col 2, so all 8 level-1 neighbors exist
        assert sorted(n.code for n in neighbors) == sorted("32746MPT")


@pytest.mark.unit
class TestFindCodesInRadius:
    """Test suite for find_codes_in_radius function."""

    def test_small_radius_includes_center(self, delhi_code):
        """Test a 10m search returns at least the center cell."""
        results = find_codes_in_radius(DELHI, 10.0).value

        assert len(results) >= 1
        assert delhi_code in results

    def test_results_within_radius(self):
        """Test that no returned cell lies outside the radius."""
        for result in find_codes_in_radius(DELHI, 25.0).value:
            assert distance(DELHI, result.center_coordinate) <= 25.0

    def test_radius_below_grid_size(self, delhi_code):
        """Test a 1m search returns only the center and warns."""
        outcome = find_codes_in_radius(DELHI, 1.0)

        assert outcome.value == [delhi_code]
        assert any("smaller than grid size" in w for w in outcome.warnings)

    def test_large_radius_returns_many(self):
        """Test a 10km search returns more than one cell and warns about the cap."""
        outcome = find_codes_in_radius(DELHI, 10_000.0)

        assert len(outcome.value) > 1
        assert any("limited to" in w for w in outcome.warnings)

    def test_center_outside_region(self):
        """Test that an out-of-region center yields an empty result."""
        outcome = find_codes_in_radius(Coordinate(0.0, 0.0), 100.0)

        assert outcome.value == []
        assert CENTER_OUT_OF_REGION_WARNING in outcome.warnings

    def test_non_positive_radius(self):
        """Test that a zero radius yields an empty result."""
        outcome = find_codes_in_radius(DELHI, 0.0)

        assert outcome.value == []
        assert "Radius must be positive" in outcome.warnings[0]

    def test_infinite_radius_rejected(self):
        """Test that an infinite radius is rejected."""
        assert find_codes_in_radius(DELHI, float("inf")).value == []

    def test_lower_precision(self):
        """Test searching with coarser cells."""
        results = find_codes_in_radius(DELHI, 100.0, precision=8).value

        assert results
        assert all(len(r.code) == 8 for r in results)
        assert all(distance(DELHI, r.center_coordinate) <= 100.0 for r in results)
