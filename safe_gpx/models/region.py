"""Exclusion regions and the region set tested during filtering.

A region is a simple polygon in lat/lon space. Two input points are the
top-left and bottom-right corners of an axis-aligned rectangle and are
expanded to the four-corner polygon (top-left, top-right, bottom-right,
bottom-left) so that containment only ever deals with polygons.

Containment uses shapely's ``covers`` predicate: a point on an edge or a
vertex counts as inside the region.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon
from shapely.prepared import prep

from safe_gpx.core.constants import MIN_POLYGON_VERTICES, RECTANGLE_CORNER_COUNT
from safe_gpx.core.exceptions import InvalidRegionError
from safe_gpx.models.point import Point

if TYPE_CHECKING:
    from shapely.prepared import PreparedGeometry

logger = logging.getLogger("safe_gpx.models.region")


@dataclass(frozen=True, slots=True)
class Region:
    """A single exclusion polygon.

    Attributes:
        vertices: Polygon vertices in the given order (at least three).
    """

    vertices: tuple[Point, ...]

    def __post_init__(self) -> None:
        if len(self.vertices) < MIN_POLYGON_VERTICES:
            msg = (
                f"A region needs at least {MIN_POLYGON_VERTICES} vertices, "
                f"got {len(self.vertices)}"
            )
            raise InvalidRegionError(msg)

    @classmethod
    def from_points(cls, points: Sequence[Point | tuple[float, float]]) -> Region:
        """Build a region from raw ``(lat, lon)`` points.

        Two points are rectangle corners (top-left, bottom-right) and are
        expanded to four. Three or more are used as-is, without checking
        that the polygon is simple.

        Raises:
            InvalidRegionError: If fewer than two points are given.
        """
        corners = [Point.from_pair(p) for p in points]
        if not corners:
            msg = "Cannot form a region from an empty point list"
            raise InvalidRegionError(msg)
        if len(corners) == 1:
            msg = f"Cannot form a region from a single point {corners[0]}"
            raise InvalidRegionError(msg)
        if len(corners) == RECTANGLE_CORNER_COUNT:
            top_left, bottom_right = corners
            corners = [
                top_left,
                Point(lat=top_left.lat, lon=bottom_right.lon),
                bottom_right,
                Point(lat=bottom_right.lat, lon=top_left.lon),
            ]
        return cls(vertices=tuple(corners))

    def to_polygon(self) -> Polygon:
        """Return the shapely polygon (``x = lon``, ``y = lat``)."""
        return Polygon([v.as_xy() for v in self.vertices])

    def describe(self) -> str:
        """Render the vertices for log output, e.g. ``[(1.000000, 2.000000) ...]``."""
        return "[" + " ".join(str(v) for v in self.vertices) + "]"


class RegionSet:
    """An immutable union of exclusion regions.

    Built once before filtering starts; there is no mutation path, so one
    instance can be shared read-only by concurrent filtering runs.
    """

    __slots__ = ("_prepared", "_regions")

    def __init__(self, regions: Iterable[Region] = ()) -> None:
        self._regions: tuple[Region, ...] = tuple(regions)
        prepared: list[PreparedGeometry] = []
        for idx, region in enumerate(self._regions):
            polygon = region.to_polygon()
            if not polygon.is_valid:
                logger.warning(
                    "Region %d %s is not a simple polygon; containment may be unreliable",
                    idx + 1,
                    region.describe(),
                )
            prepared.append(prep(polygon))
        self._prepared: tuple[PreparedGeometry, ...] = tuple(prepared)

    @classmethod
    def from_coordinates(
        cls, raw_regions: Iterable[Sequence[Point | tuple[float, float]]]
    ) -> RegionSet:
        """Build a region set from raw ``(lat, lon)`` point lists.

        Raises:
            InvalidRegionError: If any region has fewer than two points.
        """
        return cls(Region.from_points(points) for points in raw_regions)

    @property
    def regions(self) -> tuple[Region, ...]:
        return self._regions

    def contains(self, point: Point) -> bool:
        """Return True if ``point`` lies inside or on the boundary of any region."""
        candidate = ShapelyPoint(point.as_xy())
        return any(geometry.covers(candidate) for geometry in self._prepared)

    def __contains__(self, point: object) -> bool:
        return isinstance(point, Point) and self.contains(point)

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[Region]:
        return iter(self._regions)

    def __repr__(self) -> str:
        return f"RegionSet({len(self._regions)} region(s))"
