"""
Fixed constants of the DIGIPIN grid.

The grid is a 4x4 subdivision repeated CODE_LENGTH times over the region
below. Level 10 cells are roughly 3.8m x 3.8m.
"""

VERSION = "1.0.0"

# Number of subdivision levels (= symbols) in a full-precision code
CODE_LENGTH = 10
GRID_DIVISIONS = 4

# Nominal edge length of a level-10 cell, used for radius warnings
GRID_SIZE_METERS = 4.0

# 4x4 symbol layout, row 0 is the northern band, column 0 the western one
SYMBOL_GRID = (
    ("F", "C", "9", "8"),
    ("J", "3", "2", "7"),
    ("K", "4", "5", "6"),
    ("L", "M", "P", "T"),
)
ALPHABET = "".join("".join(row) for row in SYMBOL_GRID)

# Official DIGIPIN region (degrees)
REGION_MIN_LAT = 2.5
REGION_MAX_LAT = 38.5
REGION_MIN_LON = 63.5
REGION_MAX_LON = 99.5

# Coordinates closer than this to the region edge get a warning (~11km)
BOUNDARY_BUFFER_DEGREES = 0.1

EARTH_RADIUS_METERS = 6_371_000.0

# Search limits
MAX_NEIGHBOR_RADIUS = 100       # grid cells
MAX_SEARCH_RADIUS_METERS = 1_000_000.0  # 1000 km, above this results get truncated

# Precision levels below this produce very coarse cells
LOW_PRECISION_THRESHOLD = 8

# Formatted display inserts a separator after these positions
FORMAT_SEPARATOR = "-"
FORMAT_SPLITS = (3, 6)
