from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .configuration import ConfigurationRoot
from .errors import StrataError
from .paths import user_settings_file

logger = logging.getLogger(__name__)


def _build_root(args: argparse.Namespace) -> ConfigurationRoot:
    root = ConfigurationRoot()
    if args.app:
        root.add_file(user_settings_file(args.app), optional=True)
    for path in args.files:
        root.add_file(path)
    if args.env is not None:
        root.add_environment_variables(args.env)
    if args.args:
        root.add_command_line(args.args)
    return root


def show_cmd(args: argparse.Namespace) -> int:
    data = _build_root(args).as_dict()
    if args.as_json:
        print(json.dumps(data, indent=2))
    else:
        for key, value in data.items():
            print(f"{key} = {value}")
    return 0


def get_cmd(args: argparse.Namespace) -> int:
    value = _build_root(args).try_get(args.key)
    if value is None:
        return 1
    print(value)
    return 0


def _add_source_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--file",
        dest="files",
        action="append",
        type=Path,
        default=[],
        help="Configuration file (.xml, .ini, .json, .yaml); may be repeated",
    )
    p.add_argument("--env", metavar="PREFIX", help="Include environment variables with PREFIX")
    p.add_argument("--app", help="Include the user settings file of APP if present")


def build_parser(prog: str = "pystrata") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="Inspect layered configuration.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_show = subparsers.add_parser("show", help="Print the merged configuration.")
    _add_source_options(p_show)
    p_show.add_argument("--json", dest="as_json", action="store_true")
    p_show.set_defaults(func=show_cmd)

    p_get = subparsers.add_parser("get", help="Print the value for KEY.")
    p_get.add_argument("key")
    _add_source_options(p_get)
    p_get.set_defaults(func=get_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    # everything after "--" is handed to the command-line source untouched
    extra: list[str] = []
    if "--" in argv:
        idx = argv.index("--")
        argv, extra = argv[:idx], argv[idx + 1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    args.args = extra
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1
    try:
        return int(func(args))
    except (StrataError, OSError) as exc:
        logger.debug("command failed", exc_info=True)
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
