# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from collections.abc import Sequence

import argparse
import logging
import os
import pathlib
import sys

import aiohttp.web
from dotenv import load_dotenv

from composite_demo import example, logger
from dom import DEFAULT_MAX_DEPTH, DomError
from dom.web import make_app

_logger = logging.getLogger("composite_demo")



def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="composite_demo")
    parser.add_argument("--title", default=os.environ.get("COMPOSITE_TITLE", example.DEFAULT_TITLE))
    parser.add_argument(
        "--max-depth",
        type=int,
        default=os.environ.get("COMPOSITE_MAX_DEPTH", str(DEFAULT_MAX_DEPTH)),
    )
    parser.add_argument("--output", type=pathlib.Path, default=None)
    parser.add_argument("--serve", action="store_true", default=False)
    parser.add_argument("--host", default=os.environ.get("COMPOSITE_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=os.environ.get("COMPOSITE_PORT", "33333"))
    parser.add_argument("--local", action="store_true", default=False)
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    with logger.configured(local=args.local):
        document = example.build(args.title)

        try:
            content = document.render(max_depth=args.max_depth) + "\n"
        except DomError:
            _logger.exception("Unable to render document")
            return 1

        if args.serve:
            _logger.info("Serving example document", extra={"host": args.host, "port": args.port})
            aiohttp.web.run_app(
                make_app(document, max_depth=args.max_depth),
                host=args.host,
                port=args.port,
                print=None,
            )
            return 0

        if args.output:
            args.output.write_text(content, encoding="utf-8")
            _logger.info("Wrote document", extra={"path": str(args.output), "length": len(content)})
        else:
            sys.stdout.write(content)

        return 0


if __name__ == "__main__":
    sys.exit(main())
