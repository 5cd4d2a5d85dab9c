"""Main module entrypoint for the `restage-all` command.

This module parses command arguments, validates startup configuration and
runs one restage sweep.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import NoReturn

from rich.console import Console

from cf_restage_all.bootstrap import bootstrap_create_platform_adapter, bootstrap_create_sweep_controller
from cf_restage_all.config import SettingsLoadError, config_load_settings
from cf_restage_all.console import RichConsoleReporter
from cf_restage_all.domain import PLUGIN_METADATA
from cf_restage_all.jobs import RestageConfig
from cf_restage_all.logging_config import configure_logging

DEFAULT_RESTAGE_STATE = "started"
DEFAULT_AGE_DAYS = 0
DEFAULT_STAGE_TIMEOUT_SECONDS = 120
DEFAULT_RESTART_TIMEOUT_SECONDS = 120


class _RestageArgumentParser(argparse.ArgumentParser):
    """Argument parser reporting usage errors with exit code 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage()
        self.exit(1, f"Error: {message}\n")


def _main_positive_int(value: str) -> int:
    try:
        parsed_value = int(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from error
    if parsed_value <= 0:
        raise argparse.ArgumentTypeError(f"value must be > 0: {value!r}")
    return parsed_value


def _main_non_negative_int(value: str) -> int:
    try:
        parsed_value = int(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from error
    if parsed_value < 0:
        raise argparse.ArgumentTypeError(f"value must be >= 0: {value!r}")
    return parsed_value


def main_parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse `restage-all` command arguments.

    Args:
        argv: Optional argument list, defaults to `sys.argv[1:]`.

    Returns:
        argparse.Namespace: Parsed arguments with `state`, `age`, `stage_timeout` and `restart_timeout`.

    Raises:
        SystemExit: Raised with code 1 on invalid arguments.
    """

    options = PLUGIN_METADATA.options
    argument_parser = _RestageArgumentParser(
        prog=PLUGIN_METADATA.name,
        description=PLUGIN_METADATA.help_text,
        epilog=f"Usage: {PLUGIN_METADATA.usage}",
        allow_abbrev=False,
    )
    argument_parser.add_argument(
        "command",
        choices=(PLUGIN_METADATA.command_name,),
        help="Command to run",
    )
    argument_parser.add_argument(
        "-s",
        "--state",
        dest="state",
        type=str,
        default=DEFAULT_RESTAGE_STATE,
        help=options["-s"],
    )
    argument_parser.add_argument(
        "-a",
        "--age",
        dest="age",
        type=_main_non_negative_int,
        default=DEFAULT_AGE_DAYS,
        help=options["-a"],
    )
    argument_parser.add_argument(
        "-st",
        "-stageTimeout",
        "--stageTimeout",
        "--stage-timeout",
        dest="stage_timeout",
        type=_main_positive_int,
        default=DEFAULT_STAGE_TIMEOUT_SECONDS,
        help=options["-st"],
    )
    argument_parser.add_argument(
        "-rt",
        "-restartTimeout",
        "--restartTimeout",
        "--restart-timeout",
        dest="restart_timeout",
        type=_main_positive_int,
        default=DEFAULT_RESTART_TIMEOUT_SECONDS,
        help=options["-rt"],
    )
    parsed_arguments = argument_parser.parse_args(argv)
    if not parsed_arguments.state.strip():
        argument_parser.error("state must not be blank")
    return parsed_arguments


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> None:
    """Run one restage sweep with validated arguments and startup configuration.

    Args:
        argv: Optional argument list, defaults to `sys.argv[1:]`.
        console: Optional rich console for user-facing output.

    Returns:
        None: Returns normally when the sweep completed (exit code 0).

    Raises:
        SystemExit: Raised with code 1 on invalid arguments, configuration failure,
            application listing failure or an empty application list.
    """

    parsed_arguments = main_parse_arguments(argv)
    output_console = console or Console(highlight=False)
    reporter = RichConsoleReporter(console=output_console)

    try:
        settings = config_load_settings()
        configure_logging(level=settings.log_level, json_output=settings.log_json)
        platform_adapter = bootstrap_create_platform_adapter(settings)
    except SettingsLoadError as error:
        reporter.report_error(f"Fatal Error: {error}")
        raise SystemExit(1) from error

    restage_config = RestageConfig(
        state_filter=parsed_arguments.state.strip(),
        min_age_days=parsed_arguments.age,
        stage_timeout_seconds=parsed_arguments.stage_timeout,
        restart_timeout_seconds=parsed_arguments.restart_timeout,
        poll_interval_seconds=settings.poll_interval_seconds,
    )

    try:
        sweep_controller = bootstrap_create_sweep_controller(
            platform_adapter=platform_adapter,
            config=restage_config,
            console=output_console,
        )
        sweep_result = sweep_controller.job_run_sweep()
    finally:
        platform_adapter.adapter_close()

    if sweep_result.exit_code != 0:
        raise SystemExit(sweep_result.exit_code)


if __name__ == "__main__":
    main()
