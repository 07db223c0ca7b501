"""
Distance and cell-size helpers.

Everything here is a plain function of its arguments. Spans are measured
through the cell center so longitude compression at higher latitudes
doesn't skew the east-west figure.
"""
from math import atan2, cos, radians, sin, sqrt
from typing import Tuple

from .constants import EARTH_RADIUS_METERS
from .domain import Code, Coordinate

MAPS_URL_TEMPLATE = "https://www.google.com/maps?q={lat},{lon}"

# (upper bound in meters, description template) checked in order.
# Templates receive the size in meters and kilometers.
PRECISION_BANDS = (
    (5, "Building level precision (~{meters:.1f}m)"),
    (50, "Street level precision (~{meters:.0f}m)"),
    (500, "Neighborhood level precision (~{meters:.0f}m)"),
    (5000, "District level precision (~{km:.1f}km)"),
)
REGIONAL_PRECISION = "Regional level precision (~{km:.0f}km)"


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle (haversine) distance in meters."""
    lat1 = radians(a.latitude)
    lat2 = radians(b.latitude)
    dlat = radians(b.latitude - a.latitude)
    dlon = radians(b.longitude - a.longitude)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    return EARTH_RADIUS_METERS * 2 * atan2(sqrt(h), sqrt(1 - h))


def cell_spans_meters(code: Code) -> Tuple[float, float]:
    """
    North-south and east-west extent of a cell in meters.

    Returns:
        Tuple of (lat_span, lon_span)
    """
    box = code.bounding_box
    center = box.center()

    lat_span = distance(
        Coordinate(box.southwest.latitude, center.longitude),
        Coordinate(box.northeast.latitude, center.longitude),
    )
    lon_span = distance(
        Coordinate(center.latitude, box.southwest.longitude),
        Coordinate(center.latitude, box.northeast.longitude),
    )
    return lat_span, lon_span


def grid_size_meters(code: Code) -> float:
    """Average edge length of the cell."""
    lat_span, lon_span = cell_spans_meters(code)
    return (lat_span + lon_span) / 2


def area_square_meters(code: Code) -> float:
    """
    Planar approximation of the cell area.

    Not a geodesic area, but at this grid's scale the difference is noise.
    """
    lat_span, lon_span = cell_spans_meters(code)
    return lat_span * lon_span


def precision_description(code: Code) -> str:
    """Human-readable description of how precise a code is."""
    meters = grid_size_meters(code)
    for upper_bound, template in PRECISION_BANDS:
        if meters < upper_bound:
            return template.format(meters=meters, km=meters / 1000)
    return REGIONAL_PRECISION.format(meters=meters, km=meters / 1000)


def maps_url(code: Code) -> str:
    """Google Maps link to the cell center."""
    center = code.center_coordinate
    return MAPS_URL_TEMPLATE.format(lat=center.latitude, lon=center.longitude)
