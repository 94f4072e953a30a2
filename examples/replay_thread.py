#!/usr/bin/env python3
"""
Replay a stored agent-network thread through the netchat pipeline.

Usage:
    python examples/replay_thread.py thread.json
    python examples/replay_thread.py threads.json --thread-id thread-42
    python examples/replay_thread.py thread.json --stream          # Feed it as live events
    python examples/replay_thread.py thread.json --config netchat_config.yaml

The JSON file holds either a list of stored messages, or an object mapping
thread ids to message lists.

Setup:
1. Optionally copy .env.example to .env and set:
   - NETCHAT_ENVIRONMENT (production silences missing-renderer warnings)
   - NETCHAT_LOG_LEVEL
2. Optionally adjust renderer priorities in netchat_config.yaml
"""

import argparse
import asyncio
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from netchat import (
    NetchatSettings,
    StreamDispatcher,
    ThreadNotFoundError,
    create_default_registry,
    load_renderer_config,
    load_thread_history,
    render_conversation,
)
from netchat.config import apply_renderer_config, setup_logging
from netchat.core.types import StreamStatus
from netchat.runtime import MessageStarted, PartAppended, RenderedPart, StatusChanged

# Load environment from .env
load_dotenv()


class JsonFileFetcher:
    """HistoryFetcher over a local JSON export."""

    def __init__(self, path: Path):
        data = json.loads(path.read_text())
        if isinstance(data, list):
            data = {path.stem: data}
        self.threads: dict[str, list[dict[str, Any]]] = data

    async def list_messages(self, thread_id: str) -> list[dict[str, Any]]:
        if thread_id not in self.threads:
            raise ThreadNotFoundError(thread_id)
        return self.threads[thread_id]


def print_rendered(item: RenderedPart) -> None:
    if item.block is None:
        print(f"[{item.message_id}#{item.part_index}] ({item.kind.value}) <nothing>")
        return
    print(f"[{item.message_id}#{item.part_index}] {json.dumps(asdict(item.block), default=str)}")


async def stream_events(raw_messages: list[dict[str, Any]]):
    """Turn stored messages into the events a live stream would have sent."""
    yield StatusChanged(status=StreamStatus.STREAMING)
    for message in raw_messages:
        yield MessageStarted(message_id=message["id"], role=message.get("role", "assistant"))
        for part in message.get("parts") or []:
            yield PartAppended(message_id=message["id"], part=part, role=message.get("role", "assistant"))
    yield StatusChanged(status=StreamStatus.READY)


async def main():
    parser = argparse.ArgumentParser(
        description="Replay a stored netchat thread",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python examples/replay_thread.py thread.json                     # Normalized history view
  python examples/replay_thread.py thread.json --stream            # Live dispatch view
  python examples/replay_thread.py thread.json --log-level DEBUG   # Show pipeline decisions
        """,
    )
    parser.add_argument("path", type=Path, help="JSON thread export")
    parser.add_argument(
        "--thread-id",
        "-t",
        default=None,
        help="Thread to load (default: the file name without extension)",
    )
    parser.add_argument(
        "--stream",
        "-s",
        action="store_true",
        help="Dispatch the raw thread as live events instead of loading history",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Renderer config YAML (default: netchat_config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        "-l",
        default=None,
        help="Logging level (default: NETCHAT_LOG_LEVEL or INFO)",
    )

    args = parser.parse_args()

    settings = NetchatSettings()
    logger = setup_logging(args.log_level or settings.log_level)

    if not args.path.exists():
        parser.error(f"Thread file not found: {args.path}")

    registry = create_default_registry()
    try:
        apply_renderer_config(
            registry, load_renderer_config(args.config, filename=settings.config_file)
        )
    except Exception as e:
        parser.error(f"Failed to load renderer config: {e}")

    fetcher = JsonFileFetcher(args.path)
    thread_id = args.thread_id or args.path.stem

    if args.stream:
        if thread_id not in fetcher.threads:
            parser.error(f"Thread '{thread_id}' not in {args.path}")
        dispatcher = StreamDispatcher(registry, settings=settings)
        await dispatcher.run(stream_events(fetcher.threads[thread_id]), sink=print_rendered)
        return

    history = await load_thread_history(fetcher, thread_id)
    if not history.exists:
        logger.info(f"Thread '{thread_id}' does not exist")
        return

    logger.info(f"Thread '{thread_id}': {len(history.messages)} message(s) after normalization")
    for item in render_conversation(registry, history.messages, warn_missing=not settings.is_production):
        print_rendered(item)


if __name__ == "__main__":
    asyncio.run(main())
