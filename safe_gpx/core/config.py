"""Filter configuration loaded from environment variables.

All values have defaults that match the command-line tool's behaviour,
so running without any ``SAFE_GPX_*`` variables set is the normal case.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, before any input is read.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from safe_gpx.core.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_INDENT_WIDTH,
    DEFAULT_OUTPUT_SUFFIX,
    MAX_INDENT_WIDTH,
    TRACK_POINT_TAG,
)
from safe_gpx.core.exceptions import ValidationError


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Immutable filter configuration.

    Attributes:
        chunk_size: Bytes read from the input per parser feed.
        indent_width: Spaces per nesting level in the output document.
        output_suffix: Suffix added to the input stem for the default output name.
        track_point_tag: Local name of the element that carries a track point.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    indent_width: int = DEFAULT_INDENT_WIDTH
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX
    track_point_tag: str = TRACK_POINT_TAG

    @classmethod
    def from_env(cls) -> FilterConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``SAFE_GPX_CHUNK_SIZE=abc``).
        """
        config = cls(
            chunk_size=int(os.getenv("SAFE_GPX_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE))),
            indent_width=int(os.getenv("SAFE_GPX_INDENT_WIDTH", str(DEFAULT_INDENT_WIDTH))),
            output_suffix=os.getenv("SAFE_GPX_OUTPUT_SUFFIX", DEFAULT_OUTPUT_SUFFIX),
            track_point_tag=os.getenv("SAFE_GPX_TRACK_POINT_TAG", TRACK_POINT_TAG),
        )
        validate_config(config)
        return config

    @property
    def indent(self) -> str:
        """Indentation unit written once per nesting level."""
        return " " * self.indent_width


def validate_config(config: FilterConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.chunk_size <= 0:
        raise ConfigValidationError(
            "SAFE_GPX_CHUNK_SIZE",
            config.chunk_size,
            "must be > 0 (bytes)",
        )

    if not 0 <= config.indent_width <= MAX_INDENT_WIDTH:
        raise ConfigValidationError(
            "SAFE_GPX_INDENT_WIDTH",
            config.indent_width,
            f"must be between 0 and {MAX_INDENT_WIDTH} (spaces)",
        )

    if not config.output_suffix:
        raise ConfigValidationError(
            "SAFE_GPX_OUTPUT_SUFFIX",
            config.output_suffix,
            "must not be empty",
        )

    if not config.track_point_tag:
        raise ConfigValidationError(
            "SAFE_GPX_TRACK_POINT_TAG",
            config.track_point_tag,
            "must not be empty",
        )
