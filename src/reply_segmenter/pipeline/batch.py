"""Batch orchestrator: discover body files → segment → write replies."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from reply_segmenter.config.settings import ReplySegmenterSettings
from reply_segmenter.core.exceptions import ReadError, ReplySegmenterError
from reply_segmenter.core.models import BatchProgress, Message
from reply_segmenter.core.segmenter import FragmentSegmenter
from reply_segmenter.storage.writer import ReplyWriter

logger = logging.getLogger(__name__)


class BatchSegmenter:
    """Segments every email body file in a directory.

    Discovery: glob input_dir for input_pattern, sorted, offset/limit applied
    Segment:   read each file with input_encoding → FragmentSegmenter
    Write:     ReplyWriter stores the reply (or all fragments) in output_dir
    """

    def __init__(
        self,
        settings: ReplySegmenterSettings | None = None,
        on_progress: Callable[[BatchProgress], None] | None = None,
        segmenter: FragmentSegmenter | None = None,
    ) -> None:
        self._settings = settings or ReplySegmenterSettings()
        self._on_progress = on_progress
        self._progress = BatchProgress()
        self._segmenter = segmenter or FragmentSegmenter()
        self._writer: ReplyWriter | None = None

    @property
    def progress(self) -> BatchProgress:
        return self._progress

    def _ensure_writer(self) -> ReplyWriter:
        if self._writer is None:
            self._settings.ensure_directories()
            self._writer = ReplyWriter(self._settings.output_dir, self._settings.output_format)
        return self._writer

    def discover(
        self,
        input_dir: Path | None = None,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Path]:
        """List the body files to process.

        Args:
            input_dir: Directory to scan (defaults to settings.input_dir).
            limit: Cap the number of files returned. None means unlimited.
            offset: Skip the first N files in sorted order.

        Returns:
            Sorted file paths matching settings.input_pattern.
        """
        directory = input_dir or self._settings.input_dir
        if not directory.is_dir():
            raise ReadError(f"Input directory does not exist: {directory}")

        paths = sorted(p for p in directory.glob(self._settings.input_pattern) if p.is_file())
        paths = paths[offset:]
        if limit is not None:
            paths = paths[:limit]
        return paths

    def segment_file(self, path: Path) -> Message:
        """Read a single body file and segment it.

        Raises:
            ReadError: If the file cannot be read or decoded.
            InvalidArgumentError: If the file is empty.
        """
        try:
            text = path.read_text(encoding=self._settings.input_encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(f"Failed to read {path}: {e}") from e

        return self._segmenter.segment(text)

    def run(
        self,
        input_dir: Path | None = None,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> BatchProgress:
        """Segment every discovered file and write the results.

        Args:
            input_dir: Directory to scan (defaults to settings.input_dir).
            limit: Cap total files processed.
            offset: Skip first N files.

        Returns:
            BatchProgress with final counts.
        """
        writer = self._ensure_writer()
        self._progress = BatchProgress(current_stage="discovery")
        self._notify()

        paths = self.discover(input_dir, limit=limit, offset=offset)
        self._progress.files_discovered = len(paths)
        self._progress.current_stage = "segment"
        self._notify()

        for path in paths:
            self._progress.current_file = path.name
            try:
                message = self.segment_file(path)
                writer.write(path.name, message)
            except ReplySegmenterError as e:
                logger.warning("Skipping %s: %s", path, e)
                self._progress.files_failed += 1
            except OSError as e:
                logger.error("Failed to write output for %s: %s", path, e)
                self._progress.files_failed += 1
            else:
                self._progress.files_segmented += 1
            self._notify()

        self._progress.current_stage = "complete"
        self._progress.current_file = None
        self._notify()
        logger.info(
            "Batch complete: %d segmented, %d failed",
            self._progress.files_segmented,
            self._progress.files_failed,
        )
        return self._progress

    def _notify(self) -> None:
        """Send progress update to callback if registered."""
        if self._on_progress:
            self._on_progress(self._progress)
