"""Data models.

- Point: A latitude/longitude pair
- Region: One exclusion polygon
- RegionSet: The union of exclusion regions tested for every track point
"""

from safe_gpx.models.point import Point
from safe_gpx.models.region import Region, RegionSet

__all__ = [
    "Point",
    "Region",
    "RegionSet",
]
