"""Reply and fragment file writer with slug naming convention."""

from __future__ import annotations

import dataclasses
import hashlib
import json
import logging
import re
import unicodedata
from pathlib import Path

from reply_segmenter.core.exceptions import InvalidArgumentError
from reply_segmenter.core.models import Message

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")


class ReplyWriter:
    """Write segmented emails to disk as reply text or fragment JSON."""

    def __init__(self, output_dir: Path, output_format: str = "text") -> None:
        if output_format not in OUTPUT_FORMATS:
            raise InvalidArgumentError(
                f"Unknown output format {output_format!r}, expected one of {OUTPUT_FORMATS}"
            )
        self._output_dir = output_dir
        self._output_format = output_format
        self._output_dir.mkdir(parents=True, exist_ok=True)
        # slug -> source name that owns it
        self._claimed: dict[str, str] = {}

    def write(self, source_name: str, message: Message) -> Path:
        """Write a segmented email to a file.

        File naming: {slug}.reply.txt or {slug}.fragments.json
        Example: re-weekly-sync.reply.txt

        When another source already wrote to the same slug through this
        writer, a short hash of the source name is appended:
        re-hi-1a2b3c4d.reply.txt

        Args:
            source_name: Name of the input the message came from.
            message: Segmented email.

        Returns:
            Path to the written file.
        """
        slug = self._claim_slug(source_name)

        if self._output_format == "json":
            filepath = self._output_dir / f"{slug}.fragments.json"
            payload = {
                "source": source_name,
                "reply": message.reply,
                "fragments": [dataclasses.asdict(f) for f in message.fragments],
            }
            filepath.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        else:
            filepath = self._output_dir / f"{slug}.reply.txt"
            filepath.write_text(message.reply, encoding="utf-8")

        logger.debug("Wrote %s output: %s", self._output_format, filepath)
        return filepath

    def _claim_slug(self, source_name: str) -> str:
        slug = self._slugify(Path(source_name).stem)
        owner = self._claimed.setdefault(slug, source_name)
        if owner == source_name:
            return slug

        short_hash = hashlib.sha1(source_name.encode("utf-8")).hexdigest()[:8]
        unique = f"{slug}-{short_hash}"
        self._claimed.setdefault(unique, source_name)
        logger.info(
            "Slug %r already used by %s, writing %s as %r", slug, owner, source_name, unique
        )
        return unique

    @staticmethod
    def _slugify(text: str, max_length: int = 50) -> str:
        """Convert text to a filesystem-safe slug.

        Args:
            text: Input text (typically the source file stem).
            max_length: Maximum slug length.

        Returns:
            Lowercase, hyphenated, ASCII-safe slug.
        """
        text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
        text = re.sub(r"[^\w\s-]", "", text.lower())
        text = re.sub(r"[-\s_]+", "-", text).strip("-")
        return text[:max_length] if text else "untitled"
