"""Command-line entry point that starts the node's server."""

from __future__ import annotations

import argparse
import sys

from gocoin import rest
from gocoin.blockchain import Blockchain
from gocoin.db import DB_NAME, Database


def usage() -> str:
    """Return the command's help text."""
    return "\n".join(
        [
            "Welcome to Go Coin",
            "",
            "Please use the following flags:",
            "",
            "-port:\t\tSet the PORT of the server",
            "-mode:\t\tChoose the server mode ('rest')",
            "",
            "",
        ]
    )


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gocoin", add_help=False)
    parser.add_argument("-port", "--port", type=int, default=4000)
    parser.add_argument("-mode", "--mode", default="rest")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse flags and start the selected server; return an exit status."""
    args_list = sys.argv[1:] if argv is None else list(argv)
    if not args_list:
        sys.stdout.write(usage())
        return 1
    args = _parser().parse_args(args_list)
    if args.mode != "rest":
        sys.stdout.write(usage())
        return 1
    with Database(DB_NAME) as db:
        rest.start(args.port, Blockchain.load(db))
    return 0


if __name__ == "__main__":
    sys.exit(main())