"""Dataclasses for the reply segmenter domain model."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Fragment:
    """A finished run of lines sharing one classification."""

    content: str
    quoted: bool = False
    signature: bool = False
    hidden: bool = False


@dataclass
class FragmentBuilder:
    """Mutable accumulator for a fragment under construction.

    Lines are held in reverse document order, as they arrive from the
    bottom-up scan. ``finish()`` is the only way to obtain content.
    """

    quoted: bool
    lines: list[str] = field(default_factory=list)
    signature: bool = False

    @property
    def last_line(self) -> str:
        """The most recently added line (the one just below the scan cursor)."""
        return self.lines[-1]

    def add(self, line: str) -> None:
        self.lines.append(line)

    def finish(self) -> Fragment:
        """Freeze the accumulated lines into a Fragment in document order."""
        content = "\n".join(reversed(self.lines)).strip()
        return Fragment(content=content, quoted=self.quoted, signature=self.signature)


@dataclass(frozen=True)
class Message:
    """A segmented email body."""

    text: str
    fragments: tuple[Fragment, ...] = field(default_factory=tuple)

    @property
    def visible_fragments(self) -> tuple[Fragment, ...]:
        """Fragments that are neither hidden nor quoted."""
        return tuple(f for f in self.fragments if not (f.hidden or f.quoted))

    @property
    def reply(self) -> str:
        """The visible reply text authored in this message."""
        return "\n".join(f.content for f in self.visible_fragments)


@dataclass
class BatchProgress:
    """Mutable progress tracker for batch status reporting."""

    files_discovered: int = 0
    files_segmented: int = 0
    files_failed: int = 0
    current_stage: str = "idle"
    current_file: str | None = None
