"""
Command line host for the settings subsystem.

Runs a single command given on the command line, or reads command lines from
standard input until ``quit``/``exit`` or end of input.
"""

import argparse
import logging
import shlex
import sys
from collections.abc import Iterable
from typing import Any, TextIO

from src.core.app.settings_app import SettingsApp
from src.core.commands.command import Command
from src.core.commands.grammar import merge_grammars, render_grammar
from src.core.common.exceptions import SettingsConsoleError
from src.core.common.logging_utils import configure_logging
from src.core.config.app_config import AppConfig, LogLevel, StoreBackend, load_config
from src.core.config.parameter_resolution import ParameterResolution
from src.core.constants import COMMAND_NOT_RECOGNIZED_MESSAGE, COMMAND_TOKENIZE_ERROR
from src.core.domain.command_context import ExecutionContext
from src.core.repositories.repository_factory import create_settings_repository

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NOT_RECOGNIZED = 2

HOST_GRAMMAR: dict[str, Any] = {"help": None, "quit": None, "exit": None}
PROMPT = "settings> "


def build_cli_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="settings-console",
        description="Inspect, set and remove stored configuration values.",
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        metavar="FILE",
        help="YAML configuration file",
    )
    parser.add_argument(
        "--store",
        dest="store_backend",
        choices=[b.value for b in StoreBackend],
        help="Settings store backend (default: sqlite)",
    )
    parser.add_argument(
        "--store-path",
        dest="store_path",
        metavar="PATH",
        help="Settings file or database location",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        dest="verbose",
        action="count",
        help="Increase verbosity (repeatable)",
    )
    verbosity.add_argument(
        "--verbosity",
        dest="verbosity",
        type=int,
        metavar="N",
        help="Set verbosity level (>4 announces start-up, >9 traces set)",
    )
    parser.add_argument(
        "--log",
        dest="log_file",
        metavar="FILE",
        help="Also write logs to FILE",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=[level.value for level in LogLevel],
        type=str.upper,
        help="Log level for messages written to stderr",
    )
    parser.add_argument(
        "tokens",
        nargs=argparse.REMAINDER,
        help="A single command to run, e.g. 'settings get greeting'",
    )
    return parser


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_cli_parser().parse_args(argv)


def apply_cli_args(
    args: argparse.Namespace,
    environ: dict[str, str] | None = None,
) -> tuple[AppConfig, ParameterResolution]:
    """Load configuration and apply command line overrides on top of it."""
    resolution = ParameterResolution()
    verbosity = args.verbosity if args.verbosity is not None else args.verbose
    overrides = {
        "store.backend": args.store_backend,
        "store.path": args.store_path,
        "verbosity": verbosity,
        "logging.level": args.log_level,
        "logging.log_file": args.log_file,
    }
    cfg = load_config(
        args.config_file,
        resolution=resolution,
        environ=environ,
        overrides=overrides,
    )
    return cfg, resolution


def tokenize(line: str) -> list[str]:
    """Split a command line into tokens; quotes keep spaces inside a token.

    Raises:
        ValueError: On unbalanced quotes
    """
    return shlex.split(line)


class SettingsShell:
    """Feeds command lines to the settings app and tracks the exit status."""

    def __init__(self, app: SettingsApp, context: ExecutionContext) -> None:
        self.app = app
        self.context = context
        self.grammar = merge_grammars(HOST_GRAMMAR, app.load_grammar()["grammar"])

    def start(self) -> None:
        self.app.declare_myself(self.context)

    def run_tokens(self, tokens: list[str]) -> int:
        command = Command(tokens)
        result = self.app.process_command(command, self.context)
        if not result.handled:
            self.context.emit(COMMAND_NOT_RECOGNIZED_MESSAGE.format(line=command))
            return EXIT_NOT_RECOGNIZED
        return EXIT_OK if result.success else EXIT_FAILED

    def run_line(self, line: str) -> int:
        try:
            tokens = tokenize(line)
        except ValueError as e:
            self.context.emit(COMMAND_TOKENIZE_ERROR.format(error=e))
            return EXIT_FAILED
        return self.run_tokens(tokens)

    def run(self, lines: Iterable[str], interactive: bool = False) -> int:
        """Process lines until ``quit``/``exit`` or end of input.

        Returns:
            The exit status of the last command run
        """
        status = EXIT_OK
        if interactive:
            self._prompt()
        for raw in lines:
            line = raw.strip()
            if line in ("quit", "exit"):
                break
            if line == "help":
                for entry in render_grammar(self.grammar):
                    self.context.emit(entry)
            elif line:
                status = self.run_line(line)
            if interactive:
                self._prompt()
        return status

    def _prompt(self) -> None:
        self.context.output.write(PROMPT)
        self.context.output.flush()


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """
    Entry point for the ``settings-console`` script.

    Returns:
        0 on success, 1 if the (last) command failed, 2 if it was not recognized
    """
    args = parse_cli_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    try:
        cfg, resolution = apply_cli_args(args)
    except SettingsConsoleError as e:
        sys.stderr.write(f"ERROR: {e.message}\n")
        errors = e.details.get("errors")
        if isinstance(errors, list):
            for detail in errors:
                sys.stderr.write(f"  {detail}\n")
        return EXIT_FAILED

    configure_logging(
        cfg.logging.level.value, cfg.logging.log_file, cfg.logging.format
    )
    resolution.log(logging.getLogger("config.resolution"), cfg)

    try:
        store = create_settings_repository(cfg.store)
    except SettingsConsoleError as e:
        logger.error("Unable to open settings store: %s", e.message)
        sys.stderr.write(f"ERROR: {e.message}\n")
        return EXIT_FAILED

    context = ExecutionContext(store=store, verbosity=cfg.verbosity, output=stdout)
    shell = SettingsShell(SettingsApp(), context)
    try:
        shell.start()
        if args.tokens:
            return shell.run_tokens(args.tokens)
        return shell.run(stdin, interactive=stdin.isatty())
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
