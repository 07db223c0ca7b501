"""
Request/response models for the HTTP service.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from .domain import Code, Outcome


class Point(BaseModel):
    """A single lat/lon to encode."""
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class BatchEncodeRequest(BaseModel):
    """Batch of points for bulk encoding."""
    points: List[Point] = Field(..., min_length=1, max_length=1000, description="List of points (max 1000)")


class CoordinateOut(BaseModel):
    lat: float
    lon: float


class BoundsOut(BaseModel):
    south: float
    west: float
    north: float
    east: float


class CodeResponse(BaseModel):
    """A decoded cell."""
    code: str
    formatted: str
    center: CoordinateOut
    bounds: BoundsOut
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_code(cls, code: Code, warnings=()) -> "CodeResponse":
        box = code.bounding_box
        return cls(
            code=code.code,
            formatted=code.formatted(),
            center=CoordinateOut(lat=code.center_coordinate.latitude, lon=code.center_coordinate.longitude),
            bounds=BoundsOut(
                south=box.southwest.latitude,
                west=box.southwest.longitude,
                north=box.northeast.latitude,
                east=box.northeast.longitude,
            ),
            warnings=list(warnings),
        )

    @classmethod
    def from_outcome(cls, outcome: Outcome[Code]) -> "CodeResponse":
        return cls.from_code(outcome.value, outcome.warnings)


class SearchResponse(BaseModel):
    """Cells returned by a neighbor or radius search."""
    count: int
    codes: List[str]
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "SearchResponse":
        return cls(
            count=len(outcome.value),
            codes=[code.code for code in outcome.value],
            warnings=list(outcome.warnings),
        )


class DescribeResponse(BaseModel):
    code: str
    grid_size_meters: float
    area_square_meters: float
    precision: str
    maps_url: str


class BatchItem(BaseModel):
    lat: float
    lon: float
    code: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class PlaceOut(BaseModel):
    kind: str
    name: str
    code: str
    formatted: str
    center: CoordinateOut
