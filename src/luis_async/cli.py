"""Command-line query tool for a LUIS app.

Sends one utterance and prints the top intent plus any requested entities.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from typing import Optional

from luis_async.client import LuisClient, NoResultAvailableError
from luis_async.config import ClientConfig
from luis_async.transport import RecognitionTransport, TransportFailure

logger = logging.getLogger(__name__)
LOGGER_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the query tool."""
    parser = argparse.ArgumentParser(
        prog="luis-async",
        description="Send an utterance to LUIS and print the recognized intent.",
    )
    parser.add_argument("text", help="Utterance to send to LUIS")
    parser.add_argument(
        "--entity",
        action="append",
        default=[],
        metavar="TYPE",
        help="Entity type to print (may be repeated)",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file with LUIS_APP_ID and LUIS_SUBSCRIPTION_KEY",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not request verbose LUIS responses",
    )
    return parser


async def run_query(
    client: LuisClient,
    text: str,
    entity_types: Sequence[str],
) -> list[str]:
    """Submit ``text`` and render the result lines."""
    await client.submit_and_store(text)

    lines = [f"intent = {client.top_intent_name()}"]
    for entity_type in entity_types:
        lines.append(f"entity[{entity_type}] = {client.first_entity_value(entity_type)}")
    return lines


async def _run(
    config: ClientConfig,
    text: str,
    entity_types: Sequence[str],
    transport: Optional[RecognitionTransport],
) -> list[str]:
    async with LuisClient.from_config(config, transport=transport) as client:
        return await run_query(client, text, entity_types)


def main(
    argv: Optional[Sequence[str]] = None,
    transport: Optional[RecognitionTransport] = None,
) -> int:
    """Run the query tool.

    Args:
        argv: Command-line arguments; defaults to sys.argv.
        transport: Optional transport override.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)

    try:
        config = ClientConfig.from_env(args.env_file)
    except ValueError as e:
        logging.basicConfig(level=logging.ERROR, format=LOGGER_FORMAT)
        logger.error(f"Configuration error: {e}")
        return 1

    if args.quiet:
        config = replace(config, verbose=False)

    logging.basicConfig(level=getattr(logging, config.log_level), format=LOGGER_FORMAT)

    try:
        lines = asyncio.run(_run(config, args.text, args.entity, transport))
    except TransportFailure as e:
        logger.error(f"LUIS request failed: {e}")
        return 1
    except NoResultAvailableError as e:
        logger.error(f"LUIS response had no top scoring intent: {e}")
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
