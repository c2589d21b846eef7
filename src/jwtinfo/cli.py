"""
CLI entry point for jwtinfo.

Decodes a JWT passed as an argument (or piped via stdin with ``-``) and
prints the body, the header, or both as JSON.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import ConfigError, load_config, merge_cli_overrides, resolve_config_path
from .decoder import TokenParseError, parse
from .formatters import render_token
from .logging_setup import setup_logging

__all__ = ["main"]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jwtinfo",
        description="Shows information about a JWT (JSON Web Token) without signature verification.",
        epilog="Examples:\n"
               "  %(prog)s <token>                 # print the body (claims)\n"
               "  %(prog)s --header <token>        # print the header\n"
               "  %(prog)s --full --pretty <token> # header and claims, indented\n"
               "  echo '<token>' | %(prog)s -      # read from stdin\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "token",
        help='the JWT as a string (use "-" to read from stdin)',
    )

    part = parser.add_mutually_exclusive_group()
    part.add_argument(
        "--header", "-H",
        action="store_true",
        default=False,
        help="Shows the token header rather than the body",
    )
    part.add_argument(
        "--full", "-F",
        action="store_true",
        default=False,
        help='Shows header and body together as {"header": ..., "claims": ...}',
    )

    parser.add_argument(
        "--pretty", "-P",
        action="store_true",
        default=False,
        help="Pretty prints the JSON output",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML config file (default: $JWTINFO_CONFIG or ~/.config/jwtinfo/config.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Enable verbose (debug) logging on stderr",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        metavar="FILE",
        help="Also write debug logs to FILE",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def _read_token(arg: str) -> str | bytes:
    """Return the token argument, or raw stdin stripped of whitespace for ``-``."""
    if arg != "-":
        return arg
    try:
        return sys.stdin.buffer.read().strip()
    except KeyboardInterrupt:
        print(file=sys.stderr)
        sys.exit(130)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    # --- Configuration -----------------------------------------------------
    try:
        config_path = resolve_config_path(args.config)
        cfg = merge_cli_overrides(load_config(config_path), args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    log_path = setup_logging(verbose=cfg.logging.verbose, log_file=cfg.logging.file)
    if log_path:
        logger.debug("Logging to %s", log_path)
    logger.debug("Effective config: %r", cfg)

    # --- Decode -------------------------------------------------------------
    token = _read_token(args.token)
    try:
        jwt_token = parse(token)
    except TokenParseError as exc:
        logger.debug("Token rejected", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    out = cfg.output
    print(render_token(
        jwt_token,
        out.part,
        pretty=out.pretty,
        indent=out.indent,
        sort_keys=out.sort_keys,
    ))
