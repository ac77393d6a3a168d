from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from . import __version__
from .exceptions import ItemDataError, ParseError
from .items.database import ItemDatabase
from .items.models import ItemKind
from .logging_config import configure_logging
from .restrictions.evaluator import allowed_entries
from .restrictions.models import RestrictionSet
from .restrictions.parser import parse_structured_fields, parse_tokens

logger = logging.getLogger(__name__)


def _restrictions_from_args(args: argparse.Namespace) -> Optional[RestrictionSet]:
    if args.structured is not None:
        try:
            fields = json.loads(args.structured)
        except json.JSONDecodeError as e:
            raise ParseError(f"--structured is not valid JSON ({e.msg})") from e
        return parse_structured_fields(fields)
    if args.tokens:
        return parse_tokens(args.tokens)
    return None


def cmd_parse(args: argparse.Namespace) -> int:
    restrictions = _restrictions_from_args(args) or RestrictionSet()
    print(json.dumps(restrictions.to_dict(), indent=2, sort_keys=True))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    db = ItemDatabase.from_json(args.data)
    restrictions = _restrictions_from_args(args)
    if restrictions is None:
        logger.info("No restrictions given; the shop buys everything")
    result = {
        kind.value: [
            {"id": entry.id, "name": entry.name}
            for entry in allowed_entries(restrictions, db.of_kind(kind))
        ]
        for kind in ItemKind
    }
    print(json.dumps(result, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shop-restrictions",
        description="Parse shop sell restrictions and check them against item data",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_restriction_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("tokens", nargs="*", help="Token form, e.g. i1 it2 w1 wt3 et5 health")
        p.add_argument("--structured", default=None, help="Structured form as a JSON object")

    p_parse = sub.add_parser("parse", help="Print the parsed restriction set as JSON")
    add_restriction_args(p_parse)
    p_parse.set_defaults(func=cmd_parse)

    p_check = sub.add_parser("check", help="List database entries the restricted shop would buy")
    p_check.add_argument("--data", required=True, help="Item database JSON (items/weapons/armors)")
    add_restriction_args(p_check)
    p_check.set_defaults(func=cmd_check)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.structured is not None and args.tokens:
        # Only one declaration form per run
        parser.error("give either TOKEN... or --structured, not both")
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    configure_logging(level)

    try:
        return args.func(args)
    except (ParseError, ItemDataError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
