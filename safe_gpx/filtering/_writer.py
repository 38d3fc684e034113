"""Indenting token writer on top of ``lxml.etree.xmlfile``.

Tokens arrive one at a time from the parser target and are written
straight to the incremental serializer, so nothing beyond the stack of
open elements is held in memory.

Layout rules:
- every start-tag, comment and processing instruction inside the root
  element starts a new line at its depth;
- an end-tag starts a new line unless its element had no child tokens;
- whitespace-only text between tags is replaced by that indentation,
  while whitespace-only content of a leaf element is kept;
- comments and processing instructions after the root element each go
  on their own line after it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, BinaryIO

from lxml import etree

if TYPE_CHECKING:
    from contextlib import AbstractContextManager

_XML_WHITESPACE = " \t\r\n"


class IndentingWriter:
    """Writes parser events to an open ``etree.xmlfile`` context.

    ``sink`` is the stream the ``xmlfile`` writes to. Nodes that follow
    the root element go to it directly, since ``xmlfile`` refuses content
    once the document element is complete.
    """

    def __init__(self, xf: Any, indent: str, sink: BinaryIO) -> None:
        self._xf = xf
        self._indent = indent
        self._sink = sink
        self._open: list[AbstractContextManager[Any]] = []
        self._pending_space = ""
        # True between a start-tag and its first child token.
        self._leaf = False
        # True once a child of the current leaf was dropped from the output.
        self._skipped = False
        self._root_closed = False

    @property
    def depth(self) -> int:
        return len(self._open)

    def doctype(self, name: str, pubid: str | None, system: str | None) -> None:
        declaration = f"<!DOCTYPE {name}"
        if pubid:
            declaration += f' PUBLIC "{pubid}" "{system or ""}"'
        elif system:
            declaration += f' SYSTEM "{system}"'
        self._xf.write_doctype(declaration + ">")

    def start(
        self,
        tag: str,
        attrib: Mapping[str, str],
        nsmap: Mapping[str | None, str] | None = None,
    ) -> None:
        self._break_line(self.depth)
        element = self._xf.element(tag, dict(attrib), nsmap=_writer_nsmap(nsmap))
        element.__enter__()
        self._open.append(element)
        self._leaf = True
        self._skipped = False

    def skip(self) -> None:
        """Record that an element at the current position was left out."""
        self._pending_space = ""
        self._skipped = True

    def end(self) -> None:
        if self._leaf:
            if self._pending_space and not self._skipped:
                self._xf.write(self._pending_space)
            self._pending_space = ""
        else:
            self._break_line(self.depth - 1)
        element = self._open.pop()
        element.__exit__(None, None, None)
        self._leaf = False
        self._skipped = False
        if not self._open:
            self._root_closed = True

    def data(self, text: str) -> None:
        if not self._open or not text:
            return
        if not text.strip(_XML_WHITESPACE):
            self._pending_space += text
            return
        self._xf.write(self._pending_space + text)
        self._pending_space = ""

    def comment(self, text: str) -> None:
        self._write_node(etree.Comment(text))

    def pi(self, target: str, data: str | None) -> None:
        self._write_node(etree.ProcessingInstruction(target, data))

    def _write_node(self, node: etree._Element) -> None:
        if self._root_closed:
            self._xf.flush()
            serialized = etree.tostring(node, encoding="utf-8", xml_declaration=False)
            self._sink.write(b"\n" + serialized)
            return
        if self._open:
            self._break_line(self.depth)
            self._leaf = False
        self._xf.write(node)

    def _break_line(self, level: int) -> None:
        """Start a new line at ``level``; a no-op outside the root element."""
        self._pending_space = ""
        if not self._open or not self._indent:
            return
        self._xf.write("\n" + self._indent * level)


def _writer_nsmap(nsmap: Mapping[str | None, str] | None) -> dict[str | None, str] | None:
    """Translate parser namespace declarations for ``xmlfile``.

    The parser target reports the default namespace under ``""``;
    ``xmlfile`` expects ``None``.
    """
    if not nsmap:
        return None
    return {(prefix or None): uri for prefix, uri in nsmap.items()}
