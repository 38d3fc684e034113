"""Shared pytest fixtures for the safe_gpx test suite."""

from pathlib import Path

import pytest

from safe_gpx.models.region import RegionSet

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


# ---------------------------------------------------------------------------
# Sample GPX file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def three_points_gpx(data_dir: Path) -> Path:
    """Three track points; the first two lie inside ``home_regions``."""
    return data_dir / "01_three_points.gpx"


@pytest.fixture()
def malformed_coordinates_gpx(data_dir: Path) -> Path:
    """Track points with an unparsable ``lat`` and a missing ``lat``."""
    return data_dir / "02_malformed_coordinates.gpx"


@pytest.fixture()
def nested_track_points_gpx(data_dir: Path) -> Path:
    """A track point nested inside an excluded track point."""
    return data_dir / "03_nested_track_points.gpx"


@pytest.fixture()
def comments_gpx(data_dir: Path) -> Path:
    """Comments and namespaced extensions inside track points."""
    return data_dir / "04_comments_and_extensions.gpx"


# ---------------------------------------------------------------------------
# Region fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def home_regions() -> RegionSet:
    """Rectangle from top-left (29.2140, 53.1370) to bottom-right (29.2120, 53.1365)."""
    return RegionSet.from_coordinates([[(29.2140, 53.1370), (29.2120, 53.1365)]])
