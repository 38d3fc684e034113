"""Streaming GPX filter.

Reads a GPX document as a stream of XML tokens and writes it back out
without the track points that fall inside any exclusion region. Only the
suppression flag, a few counters and the stack of open output elements
are kept in memory, whatever the size of the document.

The work is split into focused pieces:
- **_target**: lxml parser target holding the suppression rules
- **_writer**: indenting token writer over ``lxml.etree.xmlfile``
- **_coordinates**: ``lat``/``lon`` attribute decoding
- **_state**: per-run counters and the ``FilterResult`` returned to callers

Character data has its newline characters removed; whitespace between
tags is replaced by the writer's indentation. Re-filtering an output
with the same regions therefore reproduces it byte for byte.

The output starts with an XML declaration only when the input does, and it
is always written as ``<?xml version='1.0' encoding='utf-8'?>``: the
input declaration's quoting and its ``standalone`` flag are not carried
over.
"""

from __future__ import annotations

import codecs
import logging
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from lxml import etree

from safe_gpx.core.config import FilterConfig
from safe_gpx.core.constants import OUTPUT_ENCODING
from safe_gpx.core.exceptions import StreamError
from safe_gpx.filtering._state import FilterResult, FilterState
from safe_gpx.filtering._target import TrackPointFilterTarget
from safe_gpx.filtering._writer import IndentingWriter

if TYPE_CHECKING:
    from safe_gpx.models.region import RegionSet

logger = logging.getLogger("safe_gpx.filtering")

__all__ = [
    "FilterResult",
    "FilterState",
    "IndentingWriter",
    "TrackPointFilterTarget",
    "filter_gpx_file",
    "filter_gpx_stream",
]

# Enough bytes to recognise a leading XML declaration.
_DECLARATION_PEEK = 64


def filter_gpx_stream(
    source: BinaryIO,
    sink: BinaryIO,
    regions: RegionSet,
    *,
    verbose: bool = False,
    config: FilterConfig | None = None,
) -> FilterResult:
    """Copy the GPX document from ``source`` to ``sink`` minus excluded track points.

    Args:
        source: Readable binary stream holding the input document.
        sink: Writable binary stream receiving the UTF-8 output document.
        regions: Exclusion regions; a point inside any of them is dropped.
        verbose: Log one INFO line per dropped point (DEBUG otherwise).
        config: Chunk size, indentation and track-point tag settings.

    Returns:
        Counters for the run.

    Raises:
        MalformedNestingError: If a track point starts inside a dropped one.
        StreamError: If the input cannot be read or is not well-formed XML,
            or the output cannot be written.
    """
    config = config or FilterConfig()
    state = FilterState()

    chunk = _read_chunk(source, max(config.chunk_size, _DECLARATION_PEEK))
    if not chunk.strip():
        msg = "Input document is empty"
        raise StreamError(msg)

    try:
        with etree.xmlfile(sink, encoding=OUTPUT_ENCODING) as xf:
            if _has_xml_declaration(chunk):
                xf.write_declaration()
            writer = IndentingWriter(xf, config.indent, sink)
            target = TrackPointFilterTarget(
                writer,
                regions,
                state,
                track_point_tag=config.track_point_tag,
                verbose=verbose,
            )
            parser = etree.XMLParser(
                target=target, resolve_entities=False, no_network=True, huge_tree=False
            )
            while chunk:
                for piece in _split_after_tags(chunk):
                    state.bytes_read += len(piece)
                    parser.feed(piece)
                xf.flush()
                chunk = _read_chunk(source, config.chunk_size)
            parser.close()
    except etree.XMLSyntaxError as exc:
        msg = f"Not valid XML near byte offset {state.bytes_read}: {exc}"
        raise StreamError(msg) from exc
    except (OSError, etree.LxmlError) as exc:
        msg = f"Cannot write filtered output: {exc}"
        raise StreamError(msg) from exc

    return state.to_result()


def filter_gpx_file(
    input_path: Path | str,
    output_path: Path | str,
    regions: RegionSet,
    *,
    verbose: bool = False,
    config: FilterConfig | None = None,
) -> FilterResult:
    """Filter a GPX file on disk.

    The output is written to a temporary file next to ``output_path`` and
    moved into place only once filtering succeeded, so a failed run never
    leaves a partial document behind. ``output_path`` may equal
    ``input_path``.

    Raises:
        MalformedNestingError: If a track point starts inside a dropped one.
        StreamError: If the input cannot be read or parsed, or the output
            cannot be written.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    try:
        source = input_path.open("rb")
    except OSError as exc:
        msg = f"Cannot read GPX file {input_path}: {exc}"
        raise StreamError(msg) from exc

    with source:
        try:
            handle = tempfile.NamedTemporaryFile(  # noqa: SIM115
                mode="wb",
                dir=output_path.parent,
                prefix=f".{output_path.name}.",
                suffix=".tmp",
                delete=False,
            )
        except OSError as exc:
            msg = f"Cannot write GPX file {output_path}: {exc}"
            raise StreamError(msg) from exc

        tmp_path = Path(handle.name)
        try:
            with handle:
                result = filter_gpx_stream(
                    source, handle, regions, verbose=verbose, config=config
                )
            try:
                tmp_path.replace(output_path)
            except OSError as exc:
                msg = f"Cannot write GPX file {output_path}: {exc}"
                raise StreamError(msg) from exc
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    logger.info(
        "Filtered %s: removed %d of %d track point(s), %d kept with undecodable coordinates",
        input_path.name,
        result.suppressed_points,
        result.track_points,
        result.coordinate_warnings,
    )
    return result


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _read_chunk(source: BinaryIO, size: int) -> bytes:
    try:
        return source.read(size)
    except OSError as exc:
        msg = f"Cannot read GPX input: {exc}"
        raise StreamError(msg) from exc


def _has_xml_declaration(head: bytes) -> bool:
    return head.removeprefix(codecs.BOM_UTF8).lstrip().startswith(b"<?xml")


def _split_after_tags(chunk: bytes) -> list[bytes]:
    """Cut ``chunk`` just after each ``>`` so offsets track the parser's position."""
    pieces = chunk.split(b">")
    tail = pieces.pop()
    split = [piece + b">" for piece in pieces]
    if tail:
        split.append(tail)
    return split
