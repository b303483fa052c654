"""Reverse-scan fragment segmentation of plain-text email bodies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from reply_segmenter.core.exceptions import InvalidArgumentError
from reply_segmenter.core.models import Fragment, FragmentBuilder, Message
from reply_segmenter.core.patterns import (
    collapse_multiline_quote_header,
    is_blank,
    is_quote_header,
    is_quoted,
    is_signature_start,
    normalize_line_endings,
)

logger = logging.getLogger(__name__)


@dataclass
class _ScanState:
    """Working state for a single segmentation call."""

    current: FragmentBuilder | None = None
    finished: list[Fragment] = field(default_factory=list)
    found_visible: bool = False


class FragmentSegmenter:
    """Split an email body into quoted, signature and visible fragments.

    Lines are scanned from the bottom of the message up. Contiguous lines
    with the same quoted/unquoted classification are grouped; a quoted
    fragment also absorbs blank lines and its ``On ... wrote:`` header.
    A block is a signature when its first line looks like a signature
    marker and the line above it is blank.

    Fragments at the bottom of the message are hidden while they are
    quoted, a signature or empty. The first fragment that is none of those
    stops the hiding for everything above it.
    """

    def segment(self, text: str) -> Message:
        """Segment an email body.

        Args:
            text: Decoded plain-text email body.

        Returns:
            Message holding the fragments in document order.

        Raises:
            InvalidArgumentError: If text is None, not a string or empty.
        """
        if not isinstance(text, str) or not text:
            raise InvalidArgumentError("Email text must be a non-empty string")

        normalized = normalize_line_endings(text)
        working = collapse_multiline_quote_header(normalized)

        state = _ScanState()
        for line in reversed(working.split("\n")):
            self._scan_line(state, line)
        self._finish_fragment(state)

        fragments = tuple(reversed(state.finished))
        logger.debug(
            "Segmented %d chars into %d fragments (%d visible)",
            len(normalized),
            len(fragments),
            sum(1 for f in fragments if not (f.hidden or f.quoted)),
        )
        return Message(text=normalized, fragments=fragments)

    def _scan_line(self, state: _ScanState, line: str) -> None:
        line = line.strip("\n")
        quoted = is_quoted(line)
        blank = is_blank(line)

        # A blank line above a signature marker closes the signature block.
        if state.current is not None and blank and is_signature_start(state.current.last_line):
            state.current.signature = True
            self._finish_fragment(state)

        current = state.current
        if current is not None and (
            current.quoted == quoted
            or (current.quoted and (blank or is_quote_header(line)))
        ):
            current.add(line)
        else:
            self._finish_fragment(state)
            state.current = FragmentBuilder(quoted=quoted, lines=[line])

    @staticmethod
    def _finish_fragment(state: _ScanState) -> None:
        if state.current is None:
            return

        fragment = state.current.finish()
        if not state.found_visible:
            if fragment.quoted or fragment.signature or not fragment.content:
                fragment = replace(fragment, hidden=True)
            else:
                state.found_visible = True

        state.finished.append(fragment)
        state.current = None


_default_segmenter = FragmentSegmenter()


def segment(text: str) -> Message:
    """Segment an email body with the shared default segmenter."""
    return _default_segmenter.segment(text)


# Name used by the classic email reply parser API.
read = segment


def parse_reply(text: str) -> str:
    """Return only the visible reply portion of an email body."""
    return segment(text).reply
