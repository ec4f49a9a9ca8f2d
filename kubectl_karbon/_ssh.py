# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import typer
from typing_extensions import Annotated

import karbon
from karbon._constants import DEFAULT_PORT

from ._options import (
    ForceOption,
    InsecureOption,
    KeyringOption,
    PortOption,
    ServerOption,
    UserOption,
)
from ._typer_utils import CLI_ERRORS, connect, fail


async def ssh(
    ctx: typer.Context,
    cluster: Annotated[
        str,
        typer.Option(
            "--cluster",
            envvar="KARBON_CLUSTER",
            help="Karbon cluster to connect against",
        ),
    ],
    server: ServerOption = None,
    user: UserOption = None,
    port: PortOption = DEFAULT_PORT,
    insecure: InsecureOption = False,
    keyring: KeyringOption = False,
    force: ForceOption = False,
    agent: Annotated[
        bool,
        typer.Option(
            "--agent/--no-agent",
            envvar="KARBON_AGENT",
            help="Add Key and Cert in SSH agent",
        ),
    ] = True,
    file: Annotated[
        bool,
        typer.Option(
            "--file",
            envvar="KARBON_FILE",
            help="Store Key and Cert in local directory (default ~/.ssh/)",
        ),
    ] = False,
):
    """Get SSH credentials to access to the k8s cluster.

    Get SSH credentials to remotely access nodes belonging to the k8s cluster.
    The credentials have an expiry time of 24 hours.

    Examples:
        # Load the node SSH certificate of "my-cluster" in the ssh-agent
        kubectl karbon ssh --server pc.example.com --cluster my-cluster

        # Write it to ~/.ssh/my-cluster and ~/.ssh/my-cluster-cert.pub instead
        kubectl karbon ssh --server pc.example.com --cluster my-cluster --no-agent --file
    """
    try:
        async with await connect(ctx, server, user, port, insecure, keyring) as api:
            credentials = await api.get_ssh_credentials(cluster)
        if file:
            private_key_file, _ = await karbon.save_key_files(
                cluster, credentials, force=force
            )
            typer.echo(f"SSH key for cluster {cluster} written to {private_key_file}")
        if agent:
            await karbon.add_key_to_agent(cluster, credentials)
            typer.echo(f"SSH key for cluster {cluster} added to ssh-agent")
    except CLI_ERRORS as e:
        fail(e)
