"""
Forward-only XML token cursor on top of lxml's iterparse.

Exposes the small pull-parser vocabulary the schedule parser needs:
current tag, attribute lookup, element text, skip subtree. Elements are
released once consumed so the tree never grows beyond the current path.
"""

import io
import logging
import os
from typing import BinaryIO, Optional, Union

from lxml import etree

from pentabarf_events.exceptions import ScheduleParseError

logger = logging.getLogger(__name__)

XmlSource = Union[str, bytes, os.PathLike, BinaryIO]

START_TAG = 'start'
END_TAG = 'end'
END_DOCUMENT = 'end-document'


class PullReader:
    """
    Pull-style cursor over the start/end tag events of an XML document.

    The cursor starts before the first token; call ``advance()`` to move
    to the next one. Once the document is exhausted it stays on
    ``END_DOCUMENT``.

    Args:
        source: Path, raw bytes, or binary file object. Paths and bytes are
            owned (and closed) by the reader; file objects are not.
        huge_tree: Disable lxml's security limits for very large feeds

    Example:
        >>> with PullReader(b'<schedule><day index="1"/></schedule>') as reader:
        ...     reader.advance()
        'start'
        ...     reader.tag
        'schedule'
    """

    def __init__(self, source: XmlSource, huge_tree: bool = False):
        if isinstance(source, (bytes, bytearray)):
            self._stream = io.BytesIO(source)
            self._owns_stream = True
        elif isinstance(source, (str, os.PathLike)):
            self._stream = open(source, 'rb')
            self._owns_stream = True
        else:
            self._stream = source
            self._owns_stream = False

        self._tokens = etree.iterparse(
            self._stream,
            events=(START_TAG, END_TAG),
            huge_tree=huge_tree,
            no_network=True,
            resolve_entities=False,
            remove_comments=True,
            remove_pis=True,
        )
        self.event: Optional[str] = None
        self.element = None

    # === Cursor movement ===

    def advance(self) -> Optional[str]:
        """Move to the next token and return its event type."""
        if self.event == END_DOCUMENT:
            return self.event
        try:
            self.event, self.element = next(self._tokens)
        except StopIteration:
            self.event, self.element = END_DOCUMENT, None
        return self.event

    def element_text(self) -> str:
        """
        Read the text of the element whose start tag is current.

        Leaves the cursor on the element's end tag. Text of nested
        elements is concatenated; an empty element yields ''.
        """
        if self.event != START_TAG:
            raise ValueError(f"element_text() requires a start tag, cursor is on {self.event}")
        element = self._advance_to_end()
        return ''.join(element.itertext())

    def skip_subtree(self) -> None:
        """
        Discard the element whose start tag is current, children included.

        Leaves the cursor on the element's end tag. No-op when the cursor
        is not on a start tag.
        """
        if self.event != START_TAG:
            return
        self._advance_to_end()
        self.release()

    def release(self) -> None:
        """
        Free a fully consumed element and its already-closed preceding siblings.

        Only valid while the cursor is on an end tag.
        """
        if self.event != END_TAG:
            return
        element = self.element
        element.clear(keep_tail=True)
        parent = element.getparent()
        if parent is None:
            return
        while element.getprevious() is not None:
            del parent[0]

    def _advance_to_end(self):
        target = self.element
        while self.advance() != END_DOCUMENT:
            if self.event == END_TAG and self.element is target:
                return target
        raise ScheduleParseError(f"Document ended inside <{etree.QName(target).localname}>")

    # === Token inspection ===

    @property
    def tag(self) -> Optional[str]:
        """Local name of the current element (namespace stripped)."""
        if self.element is None:
            return None
        return etree.QName(self.element).localname

    def attribute(self, name: str) -> Optional[str]:
        """Value of an attribute of the current element, None when absent."""
        if self.element is None:
            return None
        return self.element.get(name)

    def at_document_end(self) -> bool:
        return self.event == END_DOCUMENT

    def is_start_tag(self, name: Optional[str] = None) -> bool:
        """True on a start tag, optionally requiring a specific local name."""
        return self.event == START_TAG and (name is None or self.tag == name)

    def is_end_tag(self, name: Optional[str] = None) -> bool:
        """True on an end tag, optionally requiring a specific local name."""
        return self.event == END_TAG and (name is None or self.tag == name)

    def is_next_end_tag(self, name: str) -> bool:
        """
        Advance, then report whether the loop reading ``name`` is over.

        True on ``</name>`` and at end of document, so loops built on it
        always terminate.
        """
        self.advance()
        return self.is_end_tag(name) or self.at_document_end()

    # === Resource handling ===

    def close(self) -> None:
        """Close the underlying stream if the reader opened it."""
        if self._owns_stream and not self._stream.closed:
            logger.debug("Closing owned XML stream")
            self._stream.close()

    def __enter__(self) -> 'PullReader':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
