from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence, Tuple

from common.errors import DeployError, UsageError
from common.logging_setup import setup_logging
from tile_deploy.config import DEFAULT_CONFIG_PATH, load_config
from tile_deploy.pipeline import DeployCommand


PROG = "tile-deploy"

USAGE_DETAIL = f"""\
Usage: {PROG} <geotiff-path> <paddock-name> <date> [variant]

Arguments:
  geotiff-path   Path to source GeoTIFF file
  paddock-name   Lowercase kebab-case paddock name (e.g. p1, p1-p2)
  date           ISO date YYYY-MM-DD (e.g. 2026-02-09)
  variant        Optional: rgb, raw, or omit if only one export

Options:
  --config PATH      YAML config (default {DEFAULT_CONFIG_PATH})
  --repo-root DIR    Tiles repository checkout
  --base-url URL     Public base URL the checkout is served from
  --log-level LEVEL  DEBUG/INFO/WARNING/ERROR

Example:
  {PROG} ~/Desktop/ortho.tif p1-p2 2026-02-09 rgb"""


class _ArgumentParser(argparse.ArgumentParser):
    """argparse that reports problems as UsageError (exit 1) instead of exiting 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


OPTIONS_WITH_VALUE = ("--config", "--repo-root", "--base-url", "--log-level")


def build_parser() -> argparse.ArgumentParser:
    ap = _ArgumentParser(prog=PROG, add_help=False, usage=USAGE_DETAIL)
    ap.add_argument("-h", "--help", action="store_true")
    ap.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    ap.add_argument("--repo-root", default=None)
    ap.add_argument("--base-url", default=None)
    ap.add_argument("--log-level", default=None)
    return ap


def split_argv(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Separate option tokens from positionals before argparse sees them.

    Only "--" flags (and -h) are options; any other token, including a
    single-dash one such as "-p1", is positional so the validator reports it.
    Everything after a bare "--" is positional.
    """
    options: List[str] = []
    positional: List[str] = []
    tokens = iter(argv)
    for tok in tokens:
        if tok == "--":
            positional.extend(tokens)
            break
        if tok == "-h" or tok.startswith("--"):
            options.append(tok)
            if tok in OPTIONS_WITH_VALUE:
                value = next(tokens, None)
                if value is not None:
                    options.append(value)
        else:
            positional.append(tok)
    return options, positional


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit status (0 success, 1 any failure)."""
    try:
        options, positional = split_argv(sys.argv[1:] if argv is None else argv)
        args = build_parser().parse_args(options)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE_DETAIL)
        return e.exit_code
    if args.help:
        print(USAGE_DETAIL)
        return 0

    cwd = Path.cwd()
    config = load_config(args.config, cwd=cwd).with_overrides(
        repo_root=args.repo_root,
        base_url=args.base_url,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    try:
        DeployCommand(config).run(positional, cwd=cwd)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE_DETAIL)
        return e.exit_code
    except DeployError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.output:
            print(e.output.rstrip("\n"), file=sys.stderr)
        return e.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())
