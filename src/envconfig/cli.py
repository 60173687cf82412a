"""Command-line entry point: resolve config files and print or write them."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .exceptions import ConfigLoaderError
from .loader import init
from .options import ConfigOptions
from .shared.logging_utils import get_logger, set_package_level
from .sources import DiskFileSource
from .writer import RENDERERS

logger = get_logger(__name__)

ENV_VARS = ("ENVCONFIG_ENV", "APP_ENV")


def _default_env() -> Optional[str]:
    for name in ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def parse_replacement(text: str) -> tuple:
    """Parse a ``KEY=VALUE`` replacement argument."""
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got '{text}'")
    return key, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envconfig",
        description="Merge environment-aware config files and print the result",
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="Config files to load, in order (later files win)",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=_default_env(),
        help="Environment section to apply (default: $ENVCONFIG_ENV or $APP_ENV)",
    )
    parser.add_argument(
        "--flat",
        action="store_true",
        help="Accept files without defaults/environment sections",
    )
    parser.add_argument(
        "--extend",
        action="store_true",
        help="Merge mapping values key by key instead of replacing them",
    )
    parser.add_argument(
        "--replace",
        type=parse_replacement,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Substitute ${KEY} with VALUE in string settings (repeatable)",
    )
    parser.add_argument(
        "--definition",
        type=str,
        default=None,
        help="YAML/JSON config definition used to filter and name output",
    )
    parser.add_argument(
        "--format",
        choices=sorted(RENDERERS),
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="-",
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        help="Print the files that contributed instead of the settings",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    if args.verbose:
        set_package_level(logging.DEBUG)

    replace: Dict[str, str] = dict(args.replace)
    files = [str(Path(path).resolve()) for path in args.files]

    try:
        config_def = None
        if args.definition:
            config_def = DiskFileSource().load(str(Path(args.definition).resolve()))
        options = ConfigOptions(
            replace=replace, extend=args.extend, flat=args.flat, config_def=config_def
        )
        session = init(args.env, files, options)
        if args.list_files:
            for loaded in session.files():
                sys.stdout.write(f"{loaded.path}\t{loaded.name or ''}\n")
        else:
            session.write(args.format, args.output)
    except (ConfigLoaderError, OSError, ValueError, yaml.YAMLError) as e:
        print(f"envconfig: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
