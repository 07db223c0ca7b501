"""
DIGIPIN grid codec

Maps coordinates inside the DIGIPIN region to 10-symbol codes on a
recursive 4x4 grid, and back.

Quick start:
    from digipin import DigipinCodec

    codec = DigipinCodec()
    code = codec.encode(28.6139, 77.2090)
    print(code.formatted(), code.center_coordinate)
"""
from .config import DEFAULT_GRID, DEFAULT_REGION, CodecConfig, GridSpec
from .constants import ALPHABET, CODE_LENGTH, VERSION
from .domain import BoundingBox, Code, Coordinate, Outcome
from .exceptions import (
    ConfigurationError,
    DigipinError,
    InvalidCoordinateError,
    InvalidFormatError,
    OutOfBoundsError,
)
from .sdk import DigipinCodec

__version__ = VERSION
__all__ = [
    "DigipinCodec",
    "CodecConfig",
    "GridSpec",
    "DEFAULT_GRID",
    "DEFAULT_REGION",
    "ALPHABET",
    "CODE_LENGTH",
    "BoundingBox",
    "Code",
    "Coordinate",
    "Outcome",
    "DigipinError",
    "ConfigurationError",
    "InvalidCoordinateError",
    "InvalidFormatError",
    "OutOfBoundsError",
]
