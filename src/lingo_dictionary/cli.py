"""Command line front end: ``python -m lingo_dictionary <command>``.

Each invocation opens a session, waits for the startup sync, runs one
command and prints JSON to stdout. Logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import TYPE_CHECKING, Any

import structlog

from lingo_dictionary.config import Settings
from lingo_dictionary.logging_config import setup_logging
from lingo_dictionary.manager import open_manager

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lingo_dictionary.manager import DictionaryManager

log = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lingo-dictionary")
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="print the words the dictionary does not know")
    check.add_argument("words", nargs="+")

    suggest = commands.add_parser("suggest", help="print correction suggestions for a word")
    suggest.add_argument("word")

    add_local = commands.add_parser("add-local", help="add a word to this device only")
    add_local.add_argument("word")

    add_global = commands.add_parser("add-global", help="propose a word for the shared dictionary")
    add_global.add_argument("word")

    commands.add_parser("clear-local", help="forget every word added to this device")
    commands.add_parser("sync", help="download the latest dictionary version")
    return parser


async def _run_command(args: argparse.Namespace, manager: DictionaryManager) -> Any:
    if args.command == "sync":
        await manager.retry_dictionary_download()
    if not manager.has_dictionary():
        return None

    if args.command == "check":
        return {"unknown": await manager.check_spellings(args.words)}
    if args.command == "suggest":
        return manager.suggest_corrections(args.word).model_dump()
    if args.command == "add-local":
        await manager.add_word_local(args.word)
    elif args.command == "add-global":
        await manager.add_word_global(args.word)
    elif args.command == "clear-local":
        await manager.clear_local_dictionary()

    dictionary = manager.dictionary
    assert dictionary is not None
    return {
        "id": dictionary.id,
        "language": dictionary.language,
        "words": len(dictionary.words),
        "localWords": dictionary.local_words,
        "globalSuggestions": [s.model_dump() for s in dictionary.global_suggestions],
    }


async def run(args: argparse.Namespace, settings: Settings) -> int:
    async with open_manager(settings) as manager:
        await manager.wait_for_sync()
        result = await _run_command(args, manager)

    if result is None:
        log.error("dictionary_unavailable", language=settings.dictionary.language)
        print("No dictionary available; run 'sync' once the API is reachable.")
        return 1
    print(json.dumps(result, ensure_ascii=False))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(settings.logging)
    return asyncio.run(run(args, settings))
