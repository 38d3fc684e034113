"""Output path naming for filtered GPX files."""

from __future__ import annotations

from pathlib import Path

from safe_gpx.core.constants import DEFAULT_OUTPUT_SUFFIX


def safe_file_name(input_path: Path | str, suffix: str = DEFAULT_OUTPUT_SUFFIX) -> Path:
    """Return the default output path for ``input_path``.

    The suffix goes between the stem and the extension, in the same
    directory: ``tracks/ride.gpx`` becomes ``tracks/ride_safe.gpx``.
    """
    path = Path(input_path)
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")
