"""Expand a view literal into its builder call chain."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from tagview import BuilderApi, ParseError, expand_fragments
from tagview.errors import ViewParseError, format_diagnostic

logger = logging.getLogger("expand_view")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "literal",
        nargs="?",
        help="view literal to expand; read from stdin when omitted",
    )
    parser.add_argument(
        "--namespace",
        default=None,
        help="module or object the element constructors live on (empty for bare calls)",
    )
    parser.add_argument(
        "--fragments",
        action="store_true",
        help="print one call fragment per line instead of the joined chain",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="print a machine-readable result instead of text",
    )
    parser.add_argument("--verbose", action="store_true", help="log parser decisions")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    api = None
    if args.namespace is not None:
        try:
            api = BuilderApi(namespace=args.namespace)
        except ValueError as exc:
            parser.error(str(exc))

    source = args.literal if args.literal is not None else sys.stdin.read()

    try:
        fragments = expand_fragments(source, api=api)
    except ParseError as err:
        logger.debug("expansion failed: %s", err)
        if args.json:
            payload = {"ok": False, "error": asdict(ViewParseError.from_parse_error(err))}
            print(json.dumps(payload, indent=2))
        else:
            print(format_diagnostic(source, err), file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({"ok": True, "fragments": list(fragments), "expansion": "".join(fragments)}, indent=2))
    elif args.fragments:
        print("\n".join(fragments))
    else:
        print("".join(fragments))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
