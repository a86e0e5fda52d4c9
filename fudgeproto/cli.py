"""CLI entrypoints for the Fudge-Proto build plugin."""

from __future__ import annotations

import argparse
import shlex
import sys
from pathlib import Path
from typing import Any, Dict

from .config import ConfigError, load_config
from .generator import BuildFailure, Generator
from .logging import configure_logging

EXIT_BUILD_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def _tristate(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"true", "yes", "1"}:
        return True
    if lowered in {"false", "no", "0"}:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Echo progress and the compiler command line.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fudge-proto-build",
        description="Generate Java sources from Fudge proto files using the Fudge-Proto compiler.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Compile proto files that are new or newer than their generated sources.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "source_dir",
        nargs="?",
        default=None,
        help="Source directory to scan (defaults to the configured source_dir).",
    )
    generate_parser.add_argument(
        "--config",
        default=None,
        help="Path to .fudgeproto.yml or the directory holding it (defaults to current directory).",
    )
    generate_parser.add_argument(
        "--excludes",
        default=None,
        help="Semicolon-separated wildcard patterns of proto files to skip.",
    )
    generate_parser.add_argument(
        "--search-dir",
        action="append",
        default=None,
        dest="search_dirs",
        help="Extra directory for resolving imports; may be repeated or semicolon-separated.",
    )
    generate_parser.add_argument(
        "--list-files",
        action="store_true",
        default=None,
        help="List every proto file found, ignored or excluded.",
    )
    generate_parser.add_argument(
        "--rebuild-all",
        action="store_true",
        default=None,
        help="Compile every proto file regardless of timestamps.",
    )
    generate_parser.add_argument(
        "--git-ignore",
        action="store_true",
        default=None,
        help="Ask the compiler to write a .gitignore for generated files.",
    )
    generate_parser.add_argument(
        "--no-equals",
        action="store_false",
        default=None,
        dest="equals",
        help="Do not generate equals methods.",
    )
    generate_parser.add_argument(
        "--no-hash-code",
        action="store_false",
        default=None,
        dest="hash_code",
        help="Do not generate hashCode methods.",
    )
    generate_parser.add_argument(
        "--no-to-string",
        action="store_false",
        default=None,
        dest="to_string",
        help="Do not generate toString methods.",
    )
    generate_parser.add_argument(
        "--fudge-context",
        default=None,
        help="Expression used in place of a parameterized Fudge context.",
    )
    generate_parser.add_argument(
        "--fields-mutable",
        type=_tristate,
        default=None,
        metavar="{true,false}",
        help="Whether fields are mutable by default.",
    )
    generate_parser.add_argument(
        "--fields-required",
        type=_tristate,
        default=None,
        metavar="{true,false}",
        help="Whether fields are required by default.",
    )
    generate_parser.add_argument(
        "--file-header",
        default=None,
        help="Text added to the top of each generated file.",
    )
    generate_parser.add_argument(
        "--file-footer",
        default=None,
        help="Text added to the end of each generated file.",
    )
    generate_parser.add_argument(
        "--compiler",
        default=None,
        help="Command used to run the Fudge-Proto compiler.",
    )
    generate_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log output to this file.",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the compiler command line without running it.",
    )
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {
        "source_dir": args.source_dir,
        "excludes": args.excludes,
        "search_dirs": ";".join(args.search_dirs) if args.search_dirs else None,
        "list_files": args.list_files,
        "rebuild_all": args.rebuild_all,
        "git_ignore": args.git_ignore,
        "equals": args.equals,
        "hash_code": args.hash_code,
        "to_string": args.to_string,
        "fudge_context": args.fudge_context,
        "fields_mutable": args.fields_mutable,
        "fields_required": args.fields_required,
        "file_header": args.file_header,
        "file_footer": args.file_footer,
        "compiler": args.compiler,
    }
    if args.verbose:
        overrides["verbose"] = True
    return overrides


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for fudge-proto-build commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if getattr(args, "log_file", None) else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "generate":
        try:
            config = load_config(args.config, overrides=_overrides(args))
            configure_logging(verbose=config.verbose, log_file=log_file)
            result = Generator().run(config, dry_run=bool(args.dry_run))
        except ConfigError as exc:
            parser.exit(EXIT_CONFIG_ERROR, f"fudge-proto-build: configuration error: {exc}\n")
        except BuildFailure as exc:
            parser.exit(EXIT_BUILD_FAILURE, f"fudge-proto-build: {exc}\n")
        if args.dry_run:
            print(shlex.join([*config.compiler, *result.arguments]))
        else:
            print(f"Compiled {result.file_count} proto file(s)")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
