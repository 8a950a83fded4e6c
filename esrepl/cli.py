#!/usr/bin/env python3
"""Command-line entry point for the interactive search API shell."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from esrepl import __version__
from esrepl.config import DEFAULT_HOST, DEFAULT_PORT, Config
from esrepl.repl import Repl

ENV_PREFIX = "ESREPL_"

log = logging.getLogger(__name__)


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="esrepl",
        description=(
            "Read '<verb> <path>' lines from stdin, each followed by a body "
            "ended with a blank line, and send them to a search engine's HTTP "
            "API. Bodies are written in YAML and sent as JSON unless --raw "
            "is given. Example: `echo -e 'get _cat/indices\\n' | esrepl`."
        ),
    )
    parser.add_argument(
        "--host",
        default=_env("HOST", DEFAULT_HOST),
        help=f"API host (env: {ENV_PREFIX}HOST). Defaults to {DEFAULT_HOST}.",
    )
    parser.add_argument(
        "--port",
        type=_port,
        default=_env("PORT", str(DEFAULT_PORT)),
        help=f"API port (env: {ENV_PREFIX}PORT). Defaults to {DEFAULT_PORT}.",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Send bodies unmodified, with lowercase verbs and no form content type.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for the server. Waits forever by default.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log more on stderr; repeat for debug output.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_config(args: argparse.Namespace) -> Config:
    if args.raw:
        return Config.raw(host=args.host, port=args.port, timeout=args.timeout)
    return Config(host=args.host, port=args.port, timeout=args.timeout)


def _setup_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)
    config = build_config(args)
    log.info("talking to %s (raw=%s)", config.base_url, args.raw)

    try:
        with Repl(config, sys.stdin.buffer, sys.stdout.buffer, sys.stderr.buffer) as repl:
            repl.run()
    except KeyboardInterrupt:
        print("Exit", file=sys.stderr)
        return 130
    except BrokenPipeError:
        # reader went away, e.g. `esrepl | head`; silence the flush at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1
    except OSError as exc:
        log.error("output failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
