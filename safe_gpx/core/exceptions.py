"""Unified exception taxonomy.

Every domain exception inherits from ``SafeGpxError`` and carries
structured context fields so that the command line (or any other
caller) can report failures consistently.

Taxonomy categories
-------------------
- ``ValidationError``  — bad caller input (regions, configuration).
- ``PermanentError``   — the run cannot complete (bad XML, I/O failure).

Filtering is a one-shot local batch transform, so nothing is retryable.
Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class SafeGpxError(Exception):
    """Base exception for all safe_gpx errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred
            (e.g. ``"regions"``, ``"filter"``).
        code: Machine-readable error code (e.g. ``"REGION_INVALID"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(SafeGpxError):
    """Input or domain-model validation failure."""


class PermanentError(SafeGpxError):
    """Unrecoverable failure of a filtering run."""


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------


class InvalidRegionError(ValidationError):
    """Raised when an exclusion region cannot be formed from its points."""

    default_stage = "regions"
    default_code = "REGION_INVALID"


class StreamError(PermanentError):
    """Raised when the input cannot be read or decoded, or output cannot be written."""

    default_stage = "filter"
    default_code = "STREAM_FAILED"


class MalformedNestingError(PermanentError):
    """Raised when a track point starts inside a suppressed track point.

    Attributes:
        offset: Number of input bytes consumed when the nested start-tag
            was reported.
    """

    default_stage = "filter"
    default_code = "TRKPT_NESTED"

    def __init__(self, offset: int, tag: str = "trkpt") -> None:
        self.offset = offset
        super().__init__(f"<{tag}> inside <{tag}> near byte offset {offset}")
