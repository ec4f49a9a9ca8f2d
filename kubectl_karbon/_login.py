# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import logging

import click
import rich.table
import typer
from rich import box
from rich.console import Console
from typing_extensions import Annotated

import karbon
from karbon._constants import DEFAULT_KUBIE_PATH, DEFAULT_PORT

from ._options import (
    ClustersOption,
    ForceOption,
    InsecureOption,
    KeyringOption,
    KubieOption,
    KubiePathOption,
    MergeOption,
    PortOption,
    ServerOption,
    UserOption,
)
from ._settings import Settings
from ._typer_utils import CLI_ERRORS, connect, fail, split_clusters

logger = logging.getLogger(__name__)
console = Console()


async def select_cluster(api: karbon.Api) -> str:
    """Ask the user to pick one of the clusters known to Prism Central."""
    clusters = await api.list_clusters()
    if not clusters:
        raise karbon.NotFoundError("no Karbon cluster found")

    table = rich.table.Table(box=box.SIMPLE)
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Version", style="magenta", no_wrap=True)
    table.add_column("API endpoint", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("UUID", style="dim", no_wrap=True)
    for index, cluster in enumerate(clusters, start=1):
        table.add_row(
            str(index),
            cluster.name,
            cluster.state,
            cluster.version,
            cluster.kubeapi_server_ipv4_address,
            cluster.deployment_type,
            cluster.uuid,
        )
    console.print(table)

    index = typer.prompt("Select cluster", type=click.IntRange(1, len(clusters)))
    return clusters[index - 1].name


async def login(
    ctx: typer.Context,
    server: ServerOption = None,
    user: UserOption = None,
    cluster: ClustersOption = None,
    port: PortOption = DEFAULT_PORT,
    insecure: InsecureOption = False,
    force: ForceOption = False,
    kubie: KubieOption = False,
    kubie_path: KubiePathOption = DEFAULT_KUBIE_PATH,
    keyring: KeyringOption = False,
    merge: MergeOption = False,
    ssh_agent: Annotated[
        bool,
        typer.Option(
            "--ssh-agent", envvar="KARBON_SSH_AGENT", help="Add Key and Cert in SSH agent"
        ),
    ] = False,
    ssh_file: Annotated[
        bool,
        typer.Option(
            "--ssh-file",
            envvar="KARBON_SSH_FILE",
            help="Save Key and Cert in ~/.ssh/ directory",
        ),
    ] = False,
):
    """Authenticate user with Nutanix Prism Central.

    Create a local kubeconfig file for the selected cluster(s). If enabled,
    retrieve the SSH key/cert and add them to the ssh-agent or to files in
    the ~/.ssh/ directory.

    Examples:
        # Login into a cluster and keep the password in the OS keyring
        kubectl karbon login --server pc.example.com --cluster my-cluster --keyring

        # Choose the cluster interactively and load its SSH key in the agent
        kubectl karbon login --server pc.example.com --ssh-agent
    """
    settings = ctx.find_object(Settings) or Settings()
    try:
        async with await connect(ctx, server, user, port, insecure, keyring) as api:
            clusters = split_clusters(cluster)
            if not clusters:
                clusters = [await select_cluster(api)]

            for name in clusters:
                kubeconfig = await api.get_kubeconfig(name)
                path = karbon.resolve_kubeconfig_path(
                    settings.kubeconfig, name, kubie=kubie, kubie_path=kubie_path
                )
                await karbon.save_kubeconfig(path, kubeconfig, merge=merge)

                if ssh_agent or ssh_file:
                    try:
                        credentials = await api.get_ssh_credentials(name)
                    except karbon.KarbonError as e:
                        logger.debug("SSH credentials request failed: %s", e)
                        typer.echo(f"Failed to retrieve SSH key/cert for cluster {name}")
                    else:
                        if ssh_file:
                            await karbon.save_key_files(name, credentials, force=force)
                        if ssh_agent:
                            await karbon.add_key_to_agent(name, credentials)

                typer.echo(f"Logged successfully into {name} cluster")
    except CLI_ERRORS as e:
        fail(e)
