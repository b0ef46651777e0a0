#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys

from src.cli.commands import wordcloud


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Summarize free-text records from selected postcode districts as ranked phrases.",
        prog="python -m main",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output from the phrase pipeline to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    wordcloud.register_commands(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    raw_args = sys.argv[1:] if argv is None else argv

    parser = build_parser()
    try:
        args = parser.parse_args(raw_args)
    except argparse.ArgumentError as exc:
        parser.error(str(exc))

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
