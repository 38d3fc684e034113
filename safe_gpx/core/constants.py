"""Shared constants — single source of truth.

Names from the GPX vocabulary and the defaults used by configuration,
the streaming filter and the command line.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# GPX vocabulary
# ---------------------------------------------------------------------------

TRACK_POINT_TAG: str = "trkpt"
"""Local name of the track-point element."""

LATITUDE_ATTRIBUTE: str = "lat"
LONGITUDE_ATTRIBUTE: str = "lon"

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CHUNK_SIZE: int = 64 * 1024
"""Bytes read from the input per parser feed."""

DEFAULT_INDENT_WIDTH: int = 2
MAX_INDENT_WIDTH: int = 8

DEFAULT_OUTPUT_SUFFIX: str = "_safe"
"""Appended to the input stem when no output path is given."""

OUTPUT_ENCODING: str = "utf-8"

# Two corners describe an axis-aligned rectangle; three or more a polygon.
RECTANGLE_CORNER_COUNT: int = 2
MIN_POLYGON_VERTICES: int = 3
