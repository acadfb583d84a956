from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from ..protocol.text.loop import run_text


LOG_LEVELS = ("debug", "info", "warning", "error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chess-rules", description="Chess rules engine")
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, default="info", help="Logging level (default: info)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")

    sub.add_parser("play", help="Read commands from stdin, one per line")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    # Configured before the app factory runs, so its basicConfig is a no-op.
    # Records go to stderr and never interleave with text-shell replies.
    logging.basicConfig(level=args.log_level.upper())

    if args.command == "serve":
        uvicorn.run(
            "chessrules.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_level=args.log_level,
        )
    else:
        run_text()


if __name__ == "__main__":
    main()
