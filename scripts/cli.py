"""Minimal CLI entry point for the Reply Segmenter."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from reply_segmenter.config.settings import ReplySegmenterSettings
from reply_segmenter.core.models import BatchProgress, Message
from reply_segmenter.core.segmenter import FragmentSegmenter
from reply_segmenter.pipeline.batch import BatchSegmenter


def setup_logging(level: str) -> None:
    """Configure logging with timestamp and module info."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def on_progress(progress: BatchProgress) -> None:
    """Print a one-line batch status, naming the last file handled."""
    done = progress.files_segmented + progress.files_failed
    status = f"[{progress.current_stage}] {done}/{progress.files_discovered}"
    if progress.files_failed:
        status += f" ({progress.files_failed} failed)"
    if progress.current_file:
        status += f" {progress.current_file}"
    # Pad so a shorter line fully overwrites the previous one.
    print(status.ljust(79), end="\r", flush=True)


def _add_pagination_args(subparser: argparse.ArgumentParser) -> None:
    """Add --limit and --offset flags to a subparser."""
    subparser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Cap total files processed",
    )
    subparser.add_argument(
        "--offset",
        type=int,
        default=0,
        help="Skip the first N files",
    )


def _validate_pagination_args(args: argparse.Namespace) -> None:
    """Reject negative pagination values."""
    if getattr(args, "limit", None) is not None and args.limit < 0:
        print("Error: --limit must be non-negative", file=sys.stderr)
        sys.exit(1)
    if getattr(args, "offset", 0) < 0:
        print("Error: --offset must be non-negative", file=sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="Reply Segmenter - Extract the visible reply from plain-text emails"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # reply command
    reply_parser = subparsers.add_parser("reply", help="Print the visible reply of one email")
    reply_parser.add_argument("path", help="Email body file, or - for stdin")

    # fragments command
    fragments_parser = subparsers.add_parser(
        "fragments", help="Print every fragment of one email with its flags"
    )
    fragments_parser.add_argument("path", help="Email body file, or - for stdin")
    fragments_parser.add_argument("--json", action="store_true", help="Emit JSON")

    # batch command
    batch_parser = subparsers.add_parser("batch", help="Segment every file in a directory")
    batch_parser.add_argument("--input-dir", "-i", type=Path, dest="input_dir")
    batch_parser.add_argument("--output-dir", "-o", type=Path, dest="output_dir")
    batch_parser.add_argument("--format", "-f", choices=("text", "json"), dest="output_format")
    _add_pagination_args(batch_parser)

    return parser


def _read_input(path: str, encoding: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding=encoding)


def _print_fragments(message: Message, as_json: bool) -> None:
    if as_json:
        payload = [dataclasses.asdict(f) for f in message.fragments]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    for index, fragment in enumerate(message.fragments):
        flags = [
            name
            for name, on in (
                ("quoted", fragment.quoted),
                ("signature", fragment.signature),
                ("hidden", fragment.hidden),
            )
            if on
        ]
        print(f"--- fragment {index} [{', '.join(flags) or 'visible'}]")
        print(fragment.content)


def main() -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "batch":
        _validate_pagination_args(args)

    settings = ReplySegmenterSettings()
    setup_logging(settings.log_level)

    try:
        if args.command == "reply":
            text = _read_input(args.path, settings.input_encoding)
            print(FragmentSegmenter().segment(text).reply)

        elif args.command == "fragments":
            text = _read_input(args.path, settings.input_encoding)
            _print_fragments(FragmentSegmenter().segment(text), args.json)

        elif args.command == "batch":
            overrides = {
                key: value
                for key, value in (
                    ("output_dir", args.output_dir),
                    ("output_format", args.output_format),
                )
                if value is not None
            }
            if overrides:
                settings = settings.model_copy(update=overrides)
            batch = BatchSegmenter(settings=settings, on_progress=on_progress)
            progress = batch.run(args.input_dir, limit=args.limit, offset=args.offset)
            print(f"\n\nComplete: {progress}")

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
