"""Reply Segmenter - Split plain-text email bodies into reply, quote and signature fragments."""

from reply_segmenter.core.exceptions import (
    InvalidArgumentError,
    ReadError,
    ReplySegmenterError,
)
from reply_segmenter.core.models import Fragment, Message
from reply_segmenter.core.segmenter import FragmentSegmenter, parse_reply, read, segment

__all__ = [
    "Fragment",
    "FragmentSegmenter",
    "InvalidArgumentError",
    "Message",
    "ReadError",
    "ReplySegmenterError",
    "parse_reply",
    "read",
    "segment",
]
