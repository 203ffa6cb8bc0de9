from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from replygraph.adapters.jetstream import JetstreamConnectionError, JetstreamSubscriber
from replygraph.adapters.node_link import write_snapshot
from replygraph.app import DEFAULT_PROGRESS_EVERY, stream_reply_graph
from replygraph.config import ConfigurationError, configure_logging, get_jetstream_config
from replygraph.domain.graph import GraphStore, color_picker

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _non_negative_float(value: str) -> float:
    parsed = float(value)
    if parsed < 0:
        raise argparse.ArgumentTypeError("must be non-negative")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a live reply graph from the Bluesky Jetstream firehose"
    )
    parser.add_argument(
        "--max-events",
        type=int,
        help="Stop after reconciling this many post events",
    )
    parser.add_argument(
        "--duration",
        type=_non_negative_float,
        help="Stop after this many seconds",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the final snapshot as node-link JSON to this path",
    )
    parser.add_argument(
        "--endpoint",
        type=str,
        help="Jetstream subscribe endpoint (defaults to config)",
    )
    parser.add_argument(
        "--collection",
        type=str,
        help="Record collection to follow (defaults to config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for node color selection, for reproducible colors",
    )
    parser.add_argument(
        "--progress-every",
        type=int,
        default=DEFAULT_PROGRESS_EVERY,
        help="Log graph size every N events, 0 to disable (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default="INFO",
        help="Logging level (default: %(default)s)",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=parsed_args.log_level)

    try:
        if parsed_args.max_events is not None and parsed_args.max_events < 0:
            raise ValueError("--max-events must be non-negative")  # noqa: TRY301
        config = get_jetstream_config(
            endpoint=parsed_args.endpoint,
            collection=parsed_args.collection,
        )
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    rng = random.Random(parsed_args.seed) if parsed_args.seed is not None else None
    store = GraphStore()
    exit_code = 0
    try:
        stream_reply_graph(
            subscriber=JetstreamSubscriber(config=config),
            store=store,
            color_picker=color_picker(rng),
            max_events=parsed_args.max_events,
            duration_seconds=parsed_args.duration,
            progress_every=parsed_args.progress_every,
        )
    except KeyboardInterrupt:
        log.info("Closed by user (Ctrl+C)")
    except JetstreamConnectionError:
        log.exception("Jetstream unavailable")
        exit_code = 1

    if parsed_args.output is not None:
        try:
            path = write_snapshot(store.get(), parsed_args.output)
        except OSError:
            log.exception("Could not write snapshot to %s", parsed_args.output)
            exit_code = 1
        else:
            log.info("Wrote snapshot to %s", path)

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
