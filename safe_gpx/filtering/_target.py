"""lxml parser target implementing the track-point suppression rules.

The parser reports one event per token. A track point whose coordinates
fall inside the region set switches the state to *suppressing*: its
start-tag, everything inside it and its end-tag are dropped, and the
token after the end-tag is handled normally again.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from safe_gpx.core.exceptions import MalformedNestingError
from safe_gpx.filtering._coordinates import decode_track_point, local_name

if TYPE_CHECKING:
    from safe_gpx.filtering._state import FilterState
    from safe_gpx.filtering._writer import IndentingWriter
    from safe_gpx.models.region import RegionSet

logger = logging.getLogger("safe_gpx.filtering")


class TrackPointFilterTarget:
    """Forwards surviving parser events to an ``IndentingWriter``."""

    def __init__(
        self,
        writer: IndentingWriter,
        regions: RegionSet,
        state: FilterState,
        *,
        track_point_tag: str,
        verbose: bool = False,
    ) -> None:
        self._writer = writer
        self._regions = regions
        self._state = state
        self._track_point_tag = track_point_tag
        self._point_log_level = logging.INFO if verbose else logging.DEBUG

    def doctype(self, name: str, pubid: str | None, system: str | None) -> None:
        self._writer.doctype(name, pubid, system)

    def start(
        self,
        tag: str,
        attrib: Mapping[str, str],
        nsmap: Mapping[str | None, str] | None = None,
    ) -> None:
        if local_name(tag) == self._track_point_tag:
            self._open_track_point(attrib)
            if self._state.suppressing:
                self._writer.skip()
                return
        if not self._state.suppressing:
            self._writer.start(tag, attrib, nsmap)

    def end(self, tag: str) -> None:
        if self._state.suppressing:
            if local_name(tag) == self._track_point_tag:
                self._state.suppressing = False
            return
        self._writer.end()

    def data(self, data: str) -> None:
        text = data.replace("\n", "")
        if self._state.suppressing:
            return
        self._writer.data(text)

    def comment(self, text: str) -> None:
        if not self._state.suppressing:
            self._writer.comment(text)

    def pi(self, target: str, data: str | None = None) -> None:
        if not self._state.suppressing:
            self._writer.pi(target, data)

    def close(self) -> None:
        return None

    def _open_track_point(self, attrib: Mapping[str, str]) -> None:
        state = self._state
        if state.suppressing:
            raise MalformedNestingError(state.bytes_read, self._track_point_tag)

        state.track_points += 1
        point = decode_track_point(attrib, state.bytes_read)
        if point is None:
            state.coordinate_warnings += 1
            return

        if self._regions.contains(point):
            state.suppressed_points += 1
            state.suppressing = True
            logger.log(self._point_log_level, "Skipping track point %s", point)
