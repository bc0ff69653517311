"""Command line interface for the ECS formatter.

Purpose
-------
Expose the formatter to shell pipelines: JSON-lines records in, ECS lines
out. Also prints the package metadata banner.

Contents
--------
* :func:`cli` - click group with ``--traceback`` and ``--use-dotenv`` flags.
* ``info`` / ``format`` subcommands.
* :func:`main` - entry point wrapped by :mod:`lib_cli_exit_tools`.

System Role
-----------
Presentation layer only; all formatting goes through
:class:`lib_log_ecs.adapters.ecs_formatter.EcsFormatter`.
"""

from __future__ import annotations

import json
import logging
import os
from typing import IO, Any, Sequence

import click
import lib_cli_exit_tools
from rich.console import Console

from . import __init__conf__
from . import config as config_module
from .adapters.ecs_formatter import EcsFormatter
from .domain.events import LogEvent
from .domain.types import Service, Tracing, User
from .lib_log_ecs import summary_info

logger = logging.getLogger(__name__)

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_TYPED_CONTEXT = {"tracing": Tracing, "service": Service, "user": User}
# Context keys whose JSON objects are turned into typed contributors.


def _hydrate_context(payload: dict[str, Any]) -> dict[str, Any]:
    """Replace JSON objects under typed context keys with contributor values.

    Objects whose fields do not match the contributor stay untouched and are
    therefore folded into labels by the formatter.

    Examples
    --------
    >>> _hydrate_context({"context": {"tracing": {"trace_id": "t", "transaction_id": "x"}}})["context"]["tracing"]
    Tracing(trace_id='t', transaction_id='x')
    """
    context = payload.get("context")
    if not isinstance(context, dict):
        return payload
    hydrated = dict(context)
    for key, factory in _TYPED_CONTEXT.items():
        value = context.get(key)
        if not isinstance(value, dict):
            continue
        try:
            hydrated[key] = factory(**value)
        except TypeError:
            logger.debug("Context entry %r does not describe a %s; keeping it as a label", key, factory.__name__)
    return {**payload, "context": hydrated}


@click.group(
    invoke_without_command=True,
    context_settings=CLICK_CONTEXT_SETTINGS,
    help=__init__conf__.title,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from the nearest .env (also enabled by {config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Root command storing global flags and printing the banner when idle."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(summary_info(), nl=False)


@cli.command("format", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--tag",
    "tags",
    multiple=True,
    help=f"Tag added to every document; repeatable. {config_module.TAGS_ENV_VAR} takes precedence.",
)
@click.option("--pretty", is_flag=True, default=False, help="Pretty-print documents with Rich instead of JSON lines.")
def cli_format(source: IO[str], tags: tuple[str, ...], pretty: bool) -> None:
    """Convert JSON-lines log records from SOURCE (default: stdin) to ECS."""

    formatter = EcsFormatter(config_module.resolve_tags(tags or None))
    console = Console(soft_wrap=True) if pretty else None
    for number, line in enumerate(source, start=1):
        if not line.strip():
            logger.debug("Skipping blank input line %d", number)
            continue
        try:
            payload = json.loads(line)
        except json.JSONDecodeError as exc:
            raise click.ClickException(f"line {number}: invalid JSON ({exc.msg})") from exc
        if not isinstance(payload, dict):
            raise click.ClickException(f"line {number}: expected a JSON object, got {type(payload).__name__}")
        try:
            event = LogEvent.from_dict(_hydrate_context(payload))
        except ValueError as exc:
            raise click.ClickException(f"line {number}: {exc}") from exc
        document = formatter.format(event)
        if console is not None:
            console.print_json(document)
        else:
            click.echo(document, nl=False)


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI through :mod:`lib_cli_exit_tools` and return the exit code.

    The traceback preferences touched by ``--traceback`` are restored
    afterwards so embedding hosts keep their own settings.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
