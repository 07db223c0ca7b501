"""
DIGIPIN API
Thin FastAPI service over DigipinCodec.
"""
import logging
import time
from functools import lru_cache
from typing import List

from fastapi import FastAPI, HTTPException, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from . import metrics
from .constants import VERSION
from .domain import Coordinate
from .exceptions import InvalidCoordinateError, InvalidFormatError, OutOfBoundsError
from .locations import all_places, find_city, find_landmark
from .models import (
    BatchEncodeRequest,
    BatchItem,
    CodeResponse,
    CoordinateOut,
    DescribeResponse,
    PlaceOut,
    SearchResponse,
)
from .sdk import DigipinCodec

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_codec() -> DigipinCodec:
    """Shared codec, configured from DIGIPIN_* environment variables."""
    codec = DigipinCodec.from_env()
    logger.info(
        "DIGIPIN codec ready (precision=%d, validation=%s)",
        codec.config.precision_level, codec.config.validation_enabled
    )
    return codec


def _unprocessable(error: Exception) -> HTTPException:
    return HTTPException(status_code=422, detail=str(error))


# Initialize FastAPI application
app = FastAPI(
    title="DIGIPIN",
    description="Encode and decode DIGIPIN grid codes and search nearby cells",
    version=VERSION
)


@app.get("/metrics")
def get_metrics():
    """
    Prometheus metrics endpoint.

    Returns:
        Response: Prometheus-formatted metrics
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/health")
def health():
    """
    Health check endpoint.

    Returns:
        dict: API status and active codec settings
    """
    codec = get_codec()
    return {
        "status": "healthy",
        "version": VERSION,
        "precision_level": codec.config.precision_level,
        "validation_enabled": codec.config.validation_enabled,
    }


@app.get("/v1/encode", response_model=CodeResponse)
def encode(lat: float, lon: float):
    """
    Encode a coordinate into its DIGIPIN cell.

    Args:
        lat: Latitude
        lon: Longitude

    Returns:
        CodeResponse: Code, formatted code, cell center, cell bounds and warnings

    Raises:
        HTTPException 422: If the coordinate is invalid or outside the region
    """
    start_time = time.time()
    try:
        outcome = get_codec().encode_outcome(Coordinate(lat, lon))
    except (InvalidCoordinateError, OutOfBoundsError) as e:
        raise _unprocessable(e)

    metrics.request_duration_seconds.labels(endpoint="encode").observe(time.time() - start_time)
    return CodeResponse.from_outcome(outcome)


@app.post("/v1/encode/batch")
def encode_batch(batch: BatchEncodeRequest):
    """
    Encode up to 1000 points in one request.

    Partial success: points outside the region come back with code=None and
    the reason in their warnings.

    Returns:
        dict: Per-point results plus a summary
    """
    start_time = time.time()
    points = [(p.lat, p.lon) for p in batch.points]
    outcomes = get_codec().encode_many(points)

    items: List[BatchItem] = []
    failed = 0
    for (lat, lon), outcome in zip(points, outcomes):
        if outcome.value is None:
            failed += 1
        items.append(BatchItem(
            lat=lat,
            lon=lon,
            code=outcome.value.code if outcome.value else None,
            warnings=list(outcome.warnings),
        ))

    if failed:
        logger.info("Batch encode: %d of %d points failed", failed, len(points))

    metrics.request_duration_seconds.labels(endpoint="encode_batch").observe(time.time() - start_time)
    return {
        "total_points": len(points),
        "encoded": len(points) - failed,
        "failed": failed,
        "results": items,
        "processing_time_ms": round((time.time() - start_time) * 1000, 2)
    }


@app.get("/v1/decode/{code}", response_model=CodeResponse)
def decode(code: str):
    """
    Decode a DIGIPIN code (raw or hyphenated).

    Raises:
        HTTPException 422: If the code has the wrong length or bad characters
    """
    start_time = time.time()
    try:
        outcome = get_codec().decode_outcome(code)
    except InvalidFormatError as e:
        raise _unprocessable(e)

    metrics.request_duration_seconds.labels(endpoint="decode").observe(time.time() - start_time)
    return CodeResponse.from_outcome(outcome)


@app.get("/v1/neighbors/{code}", response_model=SearchResponse)
def neighbors(code: str, radius: int = 1):
    """
    Get the cells surrounding a code.

    A non-positive radius returns an empty list with a warning, not an error.

    Args:
        code: DIGIPIN code
        radius: Number of rings (1 = immediate neighbors, capped at 100)
    """
    start_time = time.time()
    try:
        outcome = get_codec().neighbors_outcome(code, radius)
    except InvalidFormatError as e:
        raise _unprocessable(e)

    metrics.request_duration_seconds.labels(endpoint="neighbors").observe(time.time() - start_time)
    return SearchResponse.from_outcome(outcome)


@app.get("/v1/search", response_model=SearchResponse)
def search(lat: float, lon: float, radius_m: float):
    """
    Find all cells whose centers are within radius_m meters of (lat, lon).

    A center outside the region returns an empty list with a warning.
    """
    start_time = time.time()
    try:
        center = Coordinate(lat, lon)
    except InvalidCoordinateError as e:
        raise _unprocessable(e)

    outcome = get_codec().find_codes_in_radius_outcome(center, radius_m)

    metrics.request_duration_seconds.labels(endpoint="search").observe(time.time() - start_time)
    return SearchResponse.from_outcome(outcome)


@app.get("/v1/describe/{code}", response_model=DescribeResponse)
def describe(code: str):
    """Size, area, precision band and map link for a code."""
    codec = get_codec()
    try:
        decoded = codec.decode(code)
    except InvalidFormatError as e:
        raise _unprocessable(e)

    return DescribeResponse(
        code=decoded.code,
        grid_size_meters=round(codec.grid_size_meters(decoded), 3),
        area_square_meters=round(codec.area_square_meters(decoded), 3),
        precision=codec.precision_description(decoded),
        maps_url=codec.maps_url(decoded),
    )


def _place_out(kind: str, name: str, coordinate: Coordinate) -> PlaceOut:
    code = get_codec().encode_coordinate(coordinate)
    return PlaceOut(
        kind=kind,
        name=name,
        code=code.code,
        formatted=code.formatted(),
        center=CoordinateOut(lat=coordinate.latitude, lon=coordinate.longitude),
    )


@app.get("/v1/places", response_model=List[PlaceOut])
def places():
    """Reference cities and landmarks with their codes."""
    return [_place_out(kind, name, coordinate) for kind, name, coordinate in all_places()]


@app.get("/v1/places/{name}", response_model=PlaceOut)
def place(name: str):
    """
    Look up a reference city or landmark by name (case-insensitive).

    Raises:
        HTTPException 404: If no place has that name
    """
    city = find_city(name)
    if city:
        return _place_out("city", city.name, city.coordinate)

    landmark = find_landmark(name)
    if landmark:
        return _place_out("landmark", landmark.name, landmark.coordinate)

    raise HTTPException(status_code=404, detail=f"Unknown place: {name}")
