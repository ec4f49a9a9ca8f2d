# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import logging
from typing import Optional

import click
import typer
from typing_extensions import Annotated

from karbon._constants import DEFAULT_KUBECONFIG, DEFAULT_TIMEOUT

from ._list import list_clusters
from ._login import login
from ._logout import logout
from ._settings import Settings, configure_logging, load_config_file
from ._ssh import ssh
from ._typer_utils import fail, register
from ._version import version

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="kubectl-karbon",
    no_args_is_help=True,
    help="Karbon Plugin for kubectl.",
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Optional[str],
        typer.Option(
            "--config",
            help="karbon plugin config file (default ~/.kubectl-karbon.yaml)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="print verbose logging information"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", "-d", help="print debug logging information"),
    ] = False,
    request_timeout: Annotated[
        int,
        typer.Option(
            "--request-timeout", help="request timeout in seconds for HTTP client"
        ),
    ] = DEFAULT_TIMEOUT,
    kubeconfig: Annotated[
        str,
        typer.Option(
            "--kubeconfig",
            envvar="KUBECONFIG",
            help="path to the kubeconfig file to use for CLI requests",
        ),
    ] = DEFAULT_KUBECONFIG,
):
    configure_logging(verbose=verbose, debug=debug)
    try:
        defaults, config_file = load_config_file(config)
    except (OSError, ValueError) as e:
        fail(e)
    if config_file:
        logger.info("Using config file: %s", config_file)

    # Global options only come from the file when not given on the command line
    # or in the environment.
    if "kubeconfig" in defaults and _from_default(ctx, "kubeconfig"):
        kubeconfig = str(defaults["kubeconfig"])
    if "request_timeout" in defaults and _from_default(ctx, "request_timeout"):
        request_timeout = int(defaults["request_timeout"])

    ctx.obj = Settings(
        kubeconfig=kubeconfig,
        request_timeout=request_timeout,
        config_file=config_file,
    )
    command = ctx.command.commands.get(ctx.invoked_subcommand or "")
    if defaults and command is not None:
        try:
            command_defaults = _command_defaults(command, defaults)
        except ValueError as e:
            fail(e)
        ctx.default_map = {
            **(ctx.default_map or {}),
            ctx.invoked_subcommand: command_defaults,
        }


def _command_defaults(command: click.Command, defaults: dict) -> dict:
    """Shape config file values to the parameters of one subcommand."""
    params = {param.name: param for param in command.params}
    result = {}
    for name, value in defaults.items():
        param = params.get(name)
        if param is None:
            continue
        if getattr(param, "multiple", False):
            if not isinstance(value, list):
                value = [value]
        elif isinstance(value, list):
            raise ValueError(
                f"Config key {name} must be a single value for the {command.name} command"
            )
        result[name] = value
    return result


def _from_default(ctx: typer.Context, name: str) -> bool:
    return ctx.get_parameter_source(name) in (
        None,
        click.core.ParameterSource.DEFAULT,
    )


register(app, list_clusters, "list")
register(app, login)
register(app, logout)
register(app, ssh)
register(app, version)


def go():
    app()


if __name__ == "__main__":
    go()
