"""
Codec configuration.

Two pieces:
- GridSpec: the alphabet and region bounds the grid is laid over. These are
  process-wide constants in production but injectable so tests can run the
  codec over an alternate region.
- CodecConfig: per-codec options (validation on/off, precision level),
  loadable from the environment or a .env file.
"""
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import (
    ALPHABET,
    CODE_LENGTH,
    GRID_DIVISIONS,
    REGION_MAX_LAT,
    REGION_MAX_LON,
    REGION_MIN_LAT,
    REGION_MIN_LON,
)
from .domain import BoundingBox
from .exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

ENV_VALIDATION_ENABLED = "DIGIPIN_VALIDATION_ENABLED"
ENV_PRECISION_LEVEL = "DIGIPIN_PRECISION_LEVEL"

DEFAULT_REGION = BoundingBox.from_edges(
    south=REGION_MIN_LAT,
    west=REGION_MIN_LON,
    north=REGION_MAX_LAT,
    east=REGION_MAX_LON,
)


@dataclass(frozen=True)
class GridSpec:
    """Alphabet + region the grid is built on."""
    alphabet: str = ALPHABET
    region: BoundingBox = DEFAULT_REGION
    _index: dict = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        size = GRID_DIVISIONS * GRID_DIVISIONS
        if len(self.alphabet) != size:
            raise ConfigurationError(
                f"Alphabet must have exactly {size} symbols, got {len(self.alphabet)}"
            )
        if len(set(self.alphabet)) != size:
            raise ConfigurationError("Alphabet symbols must be distinct")
        if "-" in self.alphabet:
            raise ConfigurationError("'-' is reserved as the display separator")
        if self.region.height() <= 0 or self.region.width() <= 0:
            raise ConfigurationError(f"Region must have a non-zero area, got {self.region}")

        # symbol -> (row, col)
        index = {
            symbol: divmod(position, GRID_DIVISIONS)
            for position, symbol in enumerate(self.alphabet)
        }
        object.__setattr__(self, "_index", index)

    def symbol_at(self, row: int, col: int) -> str:
        return self.alphabet[row * GRID_DIVISIONS + col]

    def position_of(self, symbol: str):
        """(row, col) of a symbol, or None when it isn't in the alphabet."""
        return self._index.get(symbol)


DEFAULT_GRID = GridSpec()


class CodecConfig(BaseModel):
    """
    Options for a DigipinCodec.

    validation_enabled: when False, encode clamps out-of-region points onto
        the nearest edge cell and decode accepts codes of any length.
    precision_level: number of grid levels (1-10). Lower levels give shorter,
        coarser codes.
    """
    model_config = ConfigDict(frozen=True)

    validation_enabled: bool = True
    precision_level: int = Field(default=CODE_LENGTH, ge=1, le=CODE_LENGTH)

    @classmethod
    def from_env(cls) -> "CodecConfig":
        """Build a config from DIGIPIN_* environment variables."""
        try:
            return cls(
                validation_enabled=os.getenv(ENV_VALIDATION_ENABLED, "true"),
                precision_level=os.getenv(ENV_PRECISION_LEVEL, str(CODE_LENGTH)),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid DIGIPIN environment configuration: {e}") from e

    def with_precision(self, level: int) -> "CodecConfig":
        try:
            return CodecConfig(validation_enabled=self.validation_enabled, precision_level=level)
        except ValidationError as e:
            raise ConfigurationError(
                f"Precision must be between 1 and {CODE_LENGTH}, got {level}"
            ) from e

    def with_validation(self, enabled: bool) -> "CodecConfig":
        return CodecConfig(validation_enabled=enabled, precision_level=self.precision_level)
