# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License

import asyncio
from contextlib import suppress
from functools import wraps
from typing import NoReturn, Optional

import keyring.errors
import typer

import karbon

from ._settings import Settings

# Errors reported as a one line message instead of a traceback
CLI_ERRORS = (karbon.KarbonError, keyring.errors.KeyringError, OSError, ValueError)


def _typer_async(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        with suppress(asyncio.CancelledError, KeyboardInterrupt):
            return asyncio.run(f(*args, **kwargs))

    return wrapper


def register(app, func, alias=None):
    if asyncio.iscoroutinefunction(func):
        func = _typer_async(func)
    if isinstance(func, typer.Typer):
        assert alias, "Typer subcommand must have an alias."
        app.add_typer(func, name=alias)
    else:
        if alias is not None:
            app.command(alias)(func)
        else:
            app.command()(func)


def fail(error) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


def prompt_password(message: str) -> str:
    return typer.prompt(message, hide_input=True)


def split_clusters(clusters: Optional[list[str]]) -> list[str]:
    """Flatten repeated and comma separated ``--cluster`` values."""
    names = []
    for value in clusters or []:
        names.extend(name.strip() for name in value.split(",") if name.strip())
    return names


def require(ctx: typer.Context, value, flag: str) -> None:
    if not value:
        raise typer.BadParameter(
            f'required flag "{flag}" not set', ctx=ctx, param_hint=f"'--{flag}'"
        )


async def connect(
    ctx: typer.Context,
    server: Optional[str],
    user: Optional[str],
    port: int,
    insecure: bool,
    use_keyring: bool,
) -> karbon.Api:
    """Create an API client from the shared command line options."""
    require(ctx, server, "server")
    settings = ctx.find_object(Settings) or Settings()
    return await karbon.api(
        server=server,
        username=user,
        port=port,
        timeout=settings.request_timeout,
        insecure=insecure,
        use_keyring=use_keyring,
        prompt=prompt_password,
    )
