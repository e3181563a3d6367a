# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point and orchestration for distinct commands."""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import replace
from textwrap import dedent
from typing import TYPE_CHECKING, Final

from distinct import __version__
from distinct._internal.error_codes import error_code_for
from distinct._internal.exceptions import DistinctError
from distinct._internal.logging_utils import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from distinct.config import Config, load_config_with_metadata
from distinct.core import distinct, distinct_by, key_path
from distinct.core.model_types import LogComponent, RecordFormat
from distinct.json import InputDecodeError, dump_json_records, load_json_records
from distinct.runtime import consume

from .helpers import echo, register_argument

if TYPE_CHECKING:
    from distinct.json import JSONList

    from .helpers import SubparserCollection

logger: logging.Logger = logging.getLogger("distinct.cli")

DISTINCT_VERSION: Final[str] = __version__
STDIN_MARKER: Final[str] = "-"
EXIT_OK: Final[int] = 0
EXIT_REFUSED: Final[int] = 1
EXIT_ERROR: Final[int] = 2
ERROR_DETAIL_ATTRIBUTES: Final[tuple[str, ...]] = ("path", "segment", "line", "field")

CONFIG_TEMPLATE: Final[str] = dedent(
    """\
    # distinct configuration template
    # Save this file as distinct.toml in the root of your project, or move the
    # settings under [tool.distinct] in pyproject.toml.
    config_version = 0

    # Dotted path to the field records are compared by, e.g. "id" or "meta.tags".
    # Leave unset to compare whole records.
    # key = "id"

    # Fail when a record does not contain the key path (default: treat as null).
    strict_keys = false

    # Record layouts: "json" (a single array) or "jsonl" (one record per line).
    input_format = "json"
    output_format = "json"

    # Indentation for JSON array output.
    indent = 2
    """,
)

CommandHandler = Callable[[argparse.Namespace], int]


def write_config_template(path: pathlib.Path, *, force: bool) -> int:
    """Write the distinct configuration template to a file.

    Args:
        path: Target path where the configuration file will be written.
        force: If True, overwrite the file if it already exists.

    Returns:
        int: Exit code (0 for success, 1 when an existing file was kept).
    """
    if path.exists() and not force:
        echo(f"[distinct] Refusing to overwrite existing file: {path}")
        echo("Use --force if you want to replace it.")
        return EXIT_REFUSED
    path.parent.mkdir(parents=True, exist_ok=True)
    consume(path.write_text(CONFIG_TEMPLATE, encoding="utf-8"))
    echo(f"[distinct] Wrote starter config to {path}")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point for the distinct command-line interface.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: Exit code from the executed command handler.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        echo(f"distinct {DISTINCT_VERSION}")
        return EXIT_OK
    if args.command is None:
        parser.error("No command provided.")
    consume(configure_logging(args.log_format, log_level=args.log_level))
    handler = _command_handlers()[args.command]
    try:
        return handler(args)
    except DistinctError as exc:
        code = error_code_for(exc)
        logger.error(
            "%s (%s)",
            exc,
            code,
            extra=structured_extra(
                component=LogComponent.CLI,
                error_code=code,
                exit_code=EXIT_ERROR,
                details=_error_details(exc),
            ),
        )
        return EXIT_ERROR


def _error_details(exc: DistinctError) -> dict[str, object]:
    """Collect the location attributes carried by package exceptions."""
    details: dict[str, object] = {}
    for name in ERROR_DETAIL_ATTRIBUTES:
        value = getattr(exc, name, None)
        if value is not None:
            details[name] = value if isinstance(value, (int, str)) else str(value)
    return details


def _command_handlers() -> dict[str, CommandHandler]:
    return {
        "run": _execute_run,
        "init": _execute_init,
    }


def _logging_options(default: object) -> argparse.ArgumentParser:
    """Build the parent parser carrying the global logging flags.

    Args:
        default: Value used when a flag is absent. Subcommands pass
            ``argparse.SUPPRESS`` so they do not reset a flag given before the
            subcommand name.

    Returns:
        Parser suitable for the ``parents`` argument of other parsers.
    """
    options = argparse.ArgumentParser(add_help=False)
    register_argument(
        options,
        "--log-format",
        choices=LOG_FORMATS,
        default=default,
        help="Logging output format (default: $DISTINCT_LOG_FORMAT or text).",
    )
    register_argument(
        options,
        "--log-level",
        choices=LOG_LEVELS,
        default=default,
        help="Verbosity of logged events (default: $DISTINCT_LOG_LEVEL or info).",
    )
    return options


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="distinct",
        parents=[_logging_options(None)],
        description="Remove duplicate records while keeping first occurrences in order.",
    )
    register_argument(
        parser,
        "--version",
        action="store_true",
        help="Print the distinct version and exit.",
    )
    subparsers = parser.add_subparsers(dest="command")
    common = _logging_options(argparse.SUPPRESS)
    _register_run_command(subparsers, parents=[common])
    _register_init_command(subparsers, parents=[common])
    return parser


def _register_run_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser],
) -> None:
    """Register the 'run' subcommand.

    Args:
        subparsers: Subparser registry where the command will be added.
        parents: Shared parent parsers carrying global flags.
    """
    run = subparsers.add_parser(
        "run",
        help="Deduplicate JSON or JSON Lines records",
        parents=list(parents),
    )
    register_argument(
        run,
        "input",
        nargs="?",
        default=STDIN_MARKER,
        help="Input file; '-' or omitted reads stdin.",
    )
    register_argument(
        run,
        "-o",
        "--output",
        type=pathlib.Path,
        default=None,
        help="Write results to this file instead of stdout.",
    )
    register_argument(
        run,
        "-k",
        "--key",
        default=None,
        help="Dotted key path to compare records by (e.g. 'id' or 'meta.tags').",
    )
    register_argument(
        run,
        "--strict-keys",
        action="store_true",
        default=None,
        help="Fail when a record does not contain the key path.",
    )
    formats = [format_.value for format_ in RecordFormat]
    register_argument(run, "--input-format", choices=formats, default=None, help="Input record layout.")
    register_argument(run, "--output-format", choices=formats, default=None, help="Output record layout.")
    register_argument(run, "--indent", type=int, default=None, help="Indentation for JSON array output.")
    register_argument(
        run,
        "--compact",
        action="store_true",
        help="Write JSON array output on a single line.",
    )
    register_argument(
        run,
        "--config",
        type=pathlib.Path,
        default=None,
        help="Explicit configuration file (default: discovered from the project root).",
    )


def _register_init_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser],
) -> None:
    init = subparsers.add_parser(
        "init",
        help="Generate a starter configuration file",
        parents=list(parents),
    )
    register_argument(
        init,
        "-s",
        "--save-as",
        dest="output",
        type=pathlib.Path,
        default=pathlib.Path("distinct.toml"),
        help="Destination for the generated configuration file.",
    )
    register_argument(
        init,
        "--force",
        action="store_true",
        help="Overwrite the output file if it already exists.",
    )


def _apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    updated = config
    if args.key is not None:
        updated = replace(updated, key=args.key.strip() or None)
    if args.strict_keys is not None:
        updated = replace(updated, strict_keys=args.strict_keys)
    if args.input_format is not None:
        updated = replace(updated, input_format=RecordFormat.from_str(args.input_format))
    if args.output_format is not None:
        updated = replace(updated, output_format=RecordFormat.from_str(args.output_format))
    if args.compact:
        updated = replace(updated, indent=None)
    elif args.indent is not None:
        updated = replace(updated, indent=max(args.indent, 0))
    return updated


def _read_input(source: str) -> str:
    if source == STDIN_MARKER:
        return sys.stdin.read()
    try:
        return pathlib.Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        message = f"unable to read {source}: {exc.strerror or exc}"
        raise InputDecodeError(message) from exc


def _deduplicate(records: JSONList, settings: Config) -> JSONList:
    if settings.key is None:
        return distinct(records)
    return distinct_by(records, key_path(settings.key, strict=settings.strict_keys))


def _execute_run(args: argparse.Namespace) -> int:
    loaded = load_config_with_metadata(args.config)
    settings = _apply_overrides(loaded.config, args)
    records = load_json_records(_read_input(args.input), settings.input_format)

    started = time.perf_counter()
    kept = _deduplicate(records, settings)
    duration_ms = (time.perf_counter() - started) * 1000

    rendered = dump_json_records(kept, settings.output_format, indent=settings.indent)
    if args.output is None:
        echo(rendered, newline=False)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        consume(args.output.write_text(rendered, encoding="utf-8"))

    logger.info(
        "Kept %d of %d records",
        len(kept),
        len(records),
        extra=structured_extra(
            component=LogComponent.CLI,
            path=args.input,
            key=settings.key,
            input_format=settings.input_format,
            total=len(records),
            kept=len(kept),
            dropped=len(records) - len(kept),
            duration_ms=duration_ms,
        ),
    )
    return EXIT_OK


def _execute_init(args: argparse.Namespace) -> int:
    return write_config_template(args.output, force=args.force)


__all__ = ["CONFIG_TEMPLATE", "main", "write_config_template"]
