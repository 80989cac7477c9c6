"""CLI entrypoint for reso-cmdlets."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import rich_click as click
from click.core import ParameterSource

from reso_cmdlets import __version__
from reso_cmdlets.cmdlets import (
    ConvertRecordIdCmdlet,
    GetFileTypeCmdlet,
    GetLocationCmdlet,
    NewDirectoryCmdlet,
    RenameItemCmdlet,
)
from reso_cmdlets.commands import (
    BaseCmdlet,
    ErrorAction,
    InvalidOperationError,
    PipelineStoppedError,
)
from reso_cmdlets.config import ERROR_ACTION_CHOICES, Settings
from reso_cmdlets.logbridge import ENGINE_LOG, install_log_forwarding

click.rich_click.USE_MARKDOWN = True

_BOUND_SOURCES = (ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT, ParameterSource.PROMPT)


def common_parameters(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options every cmdlet accepts."""

    func = click.option(
        "--error-action",
        type=click.Choice(ERROR_ACTION_CHOICES, case_sensitive=False),
        default=None,
        help=(
            "How to handle a failure: `stop`/`silentlycontinue` report it and carry on, "
            "`ignore` drops it. Without this option any failure aborts the command."
        ),
    )(func)
    return click.option(
        "-v",
        "--verbose",
        is_flag=True,
        default=False,
        help="Show verbose messages, including bridged info logs.",
    )(func)


@click.group()
@click.version_option(version=__version__, prog_name="reso-cmdlets")
@click.pass_context
def reso_cmdlets(ctx: click.Context) -> None:
    """Cmdlets for files, session location and record ids."""

    try:
        settings = Settings.from_env()
        settings.validate()
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    install_log_forwarding(
        settings.bridge.forwarded_logger,
        ENGINE_LOG,
        settings.forwarded_level_number,
    )
    ctx.obj = settings


@reso_cmdlets.command("get-file-type")
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option(
    "--recurse",
    is_flag=True,
    default=False,
    help="Scan directories and report every file below them.",
)
@common_parameters
def get_file_type(**_: Any) -> None:
    """Detect file content types from their leading bytes."""

    _invoke(GetFileTypeCmdlet, inputs=click.get_current_context().params["paths"])


@reso_cmdlets.command("rename-item")
@click.argument("path", type=click.Path())
@click.argument("new_name")
@click.option("--force", is_flag=True, default=False, help="Replace an existing destination.")
@common_parameters
def rename_item(**_: Any) -> None:
    """Rename a file within its directory."""

    _invoke(RenameItemCmdlet)


@reso_cmdlets.command("new-directory")
@click.argument("path", type=click.Path())
@click.option("--force", is_flag=True, default=False, help="Accept an existing directory.")
@common_parameters
def new_directory(**_: Any) -> None:
    """Create a directory and any missing parents."""

    _invoke(NewDirectoryCmdlet)


@reso_cmdlets.command("get-location")
@common_parameters
def get_location(**_: Any) -> None:
    """Print the current working location."""

    _invoke(GetLocationCmdlet)


@reso_cmdlets.command("convert-record-id")
@click.argument("values", nargs=-1, required=True)
@common_parameters
def convert_record_id(**_: Any) -> None:
    """Split record ids like `U-owner/R-1234` into owner and record parts."""

    _invoke(ConvertRecordIdCmdlet, inputs=click.get_current_context().params["values"])


def _invoke(cmdlet_type: type[BaseCmdlet], inputs: Iterable[Any] | None = None) -> None:
    ctx = click.get_current_context()
    settings = ctx.find_object(Settings)
    cmdlet = cmdlet_type(
        bound_parameters=_bound_parameters(ctx),
        default_error_action=ErrorAction.parse(settings.error_action),
        verbose=settings.verbose,
        bridge_wait_seconds=settings.bridge.wait_seconds,
    )
    try:
        cmdlet.invoke(inputs)
    except InvalidOperationError as error:
        raise click.ClickException(str(error)) from error
    except PipelineStoppedError as error:
        raise click.Abort from error


def _bound_parameters(ctx: click.Context) -> dict[str, Any]:
    """Parameters given explicitly, keyed the way cmdlets look them up (``NewName``)."""

    return {
        _parameter_key(name): value
        for name, value in ctx.params.items()
        if ctx.get_parameter_source(name) in _BOUND_SOURCES
    }


def _parameter_key(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


if __name__ == "__main__":  # pragma: no cover
    reso_cmdlets()
