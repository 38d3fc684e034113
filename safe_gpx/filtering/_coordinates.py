"""Decoding of track-point coordinates from element attributes."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from safe_gpx.core.constants import LATITUDE_ATTRIBUTE, LONGITUDE_ATTRIBUTE
from safe_gpx.models.point import Point

logger = logging.getLogger("safe_gpx.filtering")

_AXIS_NAMES = {LATITUDE_ATTRIBUTE: "latitude", LONGITUDE_ATTRIBUTE: "longitude"}


def local_name(name: str) -> str:
    """Strip the ``{namespace}`` part of a Clark-notation name."""
    return name.rpartition("}")[2]


def decode_track_point(attrib: Mapping[str, str], offset: int) -> Point | None:
    """Return the point carried by a track-point element's attributes.

    A missing, non-numeric or non-finite ``lat``/``lon`` is logged as a
    warning and yields ``None``; the caller keeps such points.
    """
    values: dict[str, str] = {}
    for name, value in attrib.items():
        key = local_name(name)
        if key in _AXIS_NAMES:
            values[key] = value

    lat = _decode_axis(values, LATITUDE_ATTRIBUTE, offset)
    lon = _decode_axis(values, LONGITUDE_ATTRIBUTE, offset)
    if lat is None or lon is None:
        return None
    return Point(lat=lat, lon=lon)


def _decode_axis(values: Mapping[str, str], attribute: str, offset: int) -> float | None:
    raw = values.get(attribute)
    if raw is None:
        logger.warning(
            "Track point near byte offset %d has no %s; keeping it",
            offset,
            _AXIS_NAMES[attribute],
        )
        return None
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        logger.warning(
            "Can't decode %s %r of track point near byte offset %d; keeping it",
            _AXIS_NAMES[attribute],
            raw,
            offset,
        )
        return None
    return value
