"""Command-line interface for generating passwords.

Every global option falls back to a ``KEYSMITH_*`` environment variable, e.g.
``KEYSMITH_MIN=12 KEYSMITH_REQUIRE=number,symbol keysmith chars``.
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

from keysmith import __version__
from keysmith.core.config import GenerationConfig
from keysmith.core.constraints import Constraint
from keysmith.core.types import DEFAULT_SYMBOLS, ConfigurationError, KeysmithError
from keysmith.generators.base import LetterStrategy, PasswordGenerator
from keysmith.generators.chars import CharacterStrategy
from keysmith.generators.dictionary import (
    DictionaryStrategy,
    check_word_list,
    filter_words,
)
from keysmith.sources.aspell import aspell_words
from keysmith.utils.metrics import generation_statistics
from keysmith.utils.visualization import print_generation_summary

logger = logging.getLogger(__name__)

ENV_PREFIX = "KEYSMITH_"

WordSource = Callable[[str], list[str]]


def _env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(ENV_PREFIX + name, default)


def _env_list(name: str) -> list[str]:
    value = _env(name) or ""
    return [item for item in re.split(r"[,\s]+", value) if item]


def _env_flag(name: str) -> bool:
    return (_env(name) or "").strip().lower() in ("1", "true", "yes", "on")


def _constraint(value: str) -> Constraint:
    try:
        return Constraint.parse(value)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with ``chars`` and ``dict`` subcommands."""
    parser = argparse.ArgumentParser(
        prog="keysmith",
        description="Generate passwords satisfying character-class constraints.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--min", type=int, default=_env("MIN", "10"), help="Minimal password length"
    )
    parser.add_argument(
        "--max", type=int, default=_env("MAX", "20"), help="Maximal password length"
    )
    parser.add_argument(
        "--require",
        type=_constraint,
        action="append",
        metavar="CONSTRAINT",
        help="Require this constraint; if never given, all constraints are required",
    )
    parser.add_argument(
        "--exclude",
        type=_constraint,
        action="append",
        metavar="CONSTRAINT",
        help="Exclude this constraint, overriding defaults and --require",
    )
    parser.add_argument(
        "--symbols",
        default=_env("SYMBOLS", DEFAULT_SYMBOLS),
        help="Characters to use as the valid symbols",
    )
    parser.add_argument(
        "--tries",
        type=int,
        default=_env("TRIES", "1000"),
        help="Candidates to sample before giving up",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=_env("SEED"),
        help="Seed for reproducible output",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=_env("COUNT", "1"),
        help="Number of passwords to generate",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        default=_env_flag("STATS"),
        help="Print a summary table to stderr",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_env_flag("DEBUG"),
        help="Log rejected candidates",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser(
        "chars",
        help="Select the letter portion by randomly picking single letters",
    )
    dict_parser = subparsers.add_parser(
        "dict",
        help="Select the letter portion by sampling words from a dictionary",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    dict_parser.add_argument(
        "--language",
        default=_env("LANGUAGE", "en"),
        help="aspell dictionary language",
    )

    return parser


def setup_logging(debug: bool = False) -> None:
    """Send log records to stderr through rich, keeping stdout for passwords."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[
            RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
        ],
        force=True,
    )


def build_config(args: argparse.Namespace) -> GenerationConfig:
    """Translate parsed arguments (with environment fallbacks) into a config."""
    required = args.require or [_constraint(c) for c in _env_list("REQUIRE")]
    excluded = args.exclude or [_constraint(c) for c in _env_list("EXCLUDE")]

    return GenerationConfig(
        min=args.min,
        max=args.max,
        symbols=args.symbols,
        tries=args.tries,
        required=tuple(required),
        excluded=frozenset(excluded),
        seed=args.seed,
    )


def build_strategy(
    args: argparse.Namespace, config: GenerationConfig, word_source: WordSource
) -> LetterStrategy:
    """Create the letter-picking strategy for the chosen subcommand."""
    if args.command == "chars":
        return CharacterStrategy()

    words = filter_words(word_source(args.language), config.max)
    check_word_list(words, config.min, config.max)
    logger.debug("Sampling from %d dictionary words", len(words))
    return DictionaryStrategy(words)


def run(
    args: argparse.Namespace,
    word_source: WordSource = aspell_words,
    stream: TextIO | None = None,
) -> int:
    """
    Generate and print passwords for parsed arguments.

    Args:
        args: Parsed command-line arguments
        word_source: Callable returning the word list for a language
        stream: Where passwords are written; defaults to stdout

    Returns:
        Process exit status
    """
    stream = stream or sys.stdout

    try:
        config = build_config(args)
        strategy = build_strategy(args, config, word_source)
        results = PasswordGenerator(strategy).generate_many(config, args.count)
    except (KeysmithError, argparse.ArgumentTypeError) as e:
        logger.error(str(e))
        return 1

    for result in results:
        logger.info("Found password in %d attempts", result.attempts)
        print(result.password, file=stream)

    if args.stats:
        print_generation_summary(generation_statistics(results, config))

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
