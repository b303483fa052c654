"""Shared fixtures for Reply Segmenter tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from reply_segmenter.config.settings import ReplySegmenterSettings
from reply_segmenter.core.models import Fragment, Message
from reply_segmenter.core.segmenter import FragmentSegmenter

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def load_email() -> Callable[[str], str]:
    """Loader returning the body of a fixture email by name."""

    def _load(name: str) -> str:
        return (FIXTURES_DIR / f"{name}.txt").read_text(encoding="utf-8")

    return _load


@pytest.fixture
def segmenter() -> FragmentSegmenter:
    """Fresh FragmentSegmenter instance."""
    return FragmentSegmenter()


@pytest.fixture
def sample_message() -> Message:
    """A segmented message with a reply, a quote and a signature."""
    return Message(
        text="Thanks!\n\nOn Mon, Bob wrote:\n> hello\n\n-- \nAlice",
        fragments=(
            Fragment(content="Thanks!"),
            Fragment(content="On Mon, Bob wrote:\n> hello", quoted=True, hidden=True),
            Fragment(content="-- \nAlice", signature=True, hidden=True),
        ),
    )


@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Temporary output directory for tests."""
    output = tmp_path / "output"
    output.mkdir()
    return output


@pytest.fixture
def tmp_input_dir(tmp_path: Path) -> Path:
    """Temporary input directory holding three email bodies."""
    inbox = tmp_path / "input"
    inbox.mkdir()
    (inbox / "a_reply.txt").write_text("Sounds good.\n\n> Lunch?\n", encoding="utf-8")
    (inbox / "b_signed.txt").write_text("See you there.\n\n-- \nBob\n", encoding="utf-8")
    (inbox / "c_plain.txt").write_text("Just one line", encoding="utf-8")
    (inbox / "notes.md").write_text("not an email", encoding="utf-8")
    return inbox


@pytest.fixture
def settings(tmp_input_dir: Path, tmp_output_dir: Path) -> ReplySegmenterSettings:
    """Settings pointing at the temporary input and output directories."""
    return ReplySegmenterSettings(input_dir=tmp_input_dir, output_dir=tmp_output_dir)
