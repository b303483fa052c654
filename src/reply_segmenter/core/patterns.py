"""Line normalisation and classification predicates for email bodies."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

LINE_BREAK_REGEX = re.compile(r"\r\n?")
QUOTED_REGEX = re.compile(r">+")
SIGNATURE_REGEX = re.compile(r"(?:\u2014|--|__|-\w)|(?:Sent from my (?:\w+\s*){1,3})")
# Matched against the reversed line: "...On ... wrote:" read right to left.
REVERSED_QUOTE_HEADER_REGEX = re.compile(r":etorw.*nO")
QUOTE_HEADER_START_REGEX = re.compile(r"On\s")

QUOTE_HEADER_END = "wrote:"


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return LINE_BREAK_REGEX.sub("\n", text)


def is_blank(line: str) -> bool:
    """True if the line is empty or whitespace only."""
    return not line.strip()


def is_quoted(line: str) -> bool:
    """True if the line starts with one or more ``>`` characters."""
    return QUOTED_REGEX.match(line) is not None


def is_signature_start(line: str) -> bool:
    """True if the line opens a signature block.

    Matches a leading em-dash, ``--``, ``__``, a hyphen glued to a word
    (``-John``), or a mobile footer such as ``Sent from my iPhone``.
    """
    return SIGNATURE_REGEX.match(line) is not None


def is_quote_header(line: str) -> bool:
    """True if the line ends with ``wrote:`` and has ``On`` before it."""
    return REVERSED_QUOTE_HEADER_REGEX.match(line[::-1]) is not None


def find_multiline_quote_header(text: str) -> tuple[int, int] | None:
    """Locate a quote header that may be wrapped over several lines.

    Finds the span matched by ``(?!On.*On\\s.+?wrote:)(On\\s(.+?)wrote:)``
    with dot-all semantics, without the regex engine's cubic backtracking:
    the header starts at the last ``On<whitespace>`` that is still followed
    (after at least one more character) by ``wrote:``, and ends at the first
    ``wrote:`` after it.

    Args:
        text: Newline-normalised email body.

    Returns:
        ``(start, end)`` slice bounds of the header, or None if absent.
    """
    last_end_marker = text.rfind(QUOTE_HEADER_END)
    if last_end_marker < 0:
        return None

    start: int | None = None
    for match in QUOTE_HEADER_START_REGEX.finditer(text):
        # "On", one whitespace char, then at least one char before "wrote:"
        if match.start() + 4 > last_end_marker:
            break
        start = match.start()

    if start is None:
        return None

    end = text.index(QUOTE_HEADER_END, start + 4) + len(QUOTE_HEADER_END)
    return start, end


def collapse_multiline_quote_header(text: str) -> str:
    """Join a wrapped quote header onto a single line.

    Only the one header located by ``find_multiline_quote_header`` is
    rewritten; every other part of the text is returned untouched.
    """
    span = find_multiline_quote_header(text)
    if span is None:
        return text

    start, end = span
    header = text[start:end]
    if "\n" not in header:
        return text

    collapsed = header.replace("\n", "")
    logger.debug("Collapsed %d-line quote header: %r", header.count("\n") + 1, collapsed)
    return text[:start] + collapsed + text[end:]
