"""Custom exceptions for the reply segmenter."""


class ReplySegmenterError(Exception):
    """Base exception for all reply segmenter errors."""


class InvalidArgumentError(ReplySegmenterError, ValueError):
    """An argument was absent, empty or otherwise unusable."""


class ReadError(ReplySegmenterError):
    """Failed to read or decode an email body file."""
