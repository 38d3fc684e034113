"""Data model for a geographic point."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """A WGS 84 position in signed decimal degrees.

    Attributes:
        lat: Latitude (north positive).
        lon: Longitude (east positive).
    """

    lat: float
    lon: float

    @classmethod
    def from_pair(cls, pair: Point | tuple[float, float]) -> Point:
        """Build a Point from a ``(lat, lon)`` tuple (Points pass through)."""
        if isinstance(pair, Point):
            return pair
        lat, lon = pair
        return cls(lat=float(lat), lon=float(lon))

    def as_xy(self) -> tuple[float, float]:
        """Return ``(lon, lat)``, the axis order shapely expects."""
        return (self.lon, self.lat)

    def __str__(self) -> str:
        return f"({self.lat:.6f}, {self.lon:.6f})"
