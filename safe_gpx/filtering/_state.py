"""Per-run filter state and the result handed back to the caller."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FilterResult:
    """Outcome of one filtering run.

    Attributes:
        track_points: Track-point elements seen in the input.
        suppressed_points: Track points dropped because they fell inside a region.
        coordinate_warnings: Track points kept because ``lat``/``lon`` were
            missing or could not be decoded.
    """

    track_points: int = 0
    suppressed_points: int = 0
    coordinate_warnings: int = 0

    @property
    def kept_points(self) -> int:
        return self.track_points - self.suppressed_points


@dataclass(slots=True)
class FilterState:
    """Mutable state scoped to a single run; never shared between runs.

    ``suppressing`` is True from the start-tag of an excluded track point
    up to and including its end-tag.
    """

    suppressing: bool = False
    track_points: int = 0
    suppressed_points: int = 0
    coordinate_warnings: int = 0
    bytes_read: int = 0

    def to_result(self) -> FilterResult:
        return FilterResult(
            track_points=self.track_points,
            suppressed_points=self.suppressed_points,
            coordinate_warnings=self.coordinate_warnings,
        )
