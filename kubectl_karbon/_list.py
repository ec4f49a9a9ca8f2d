# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import rich.table
import typer
from rich import box
from rich.console import Console

from karbon._constants import DEFAULT_PORT

from ._options import (
    InsecureOption,
    KeyringOption,
    PortOption,
    ServerOption,
    UserOption,
)
from ._typer_utils import CLI_ERRORS, connect, fail

console = Console()


def cluster_table(clusters) -> rich.table.Table:
    table = rich.table.Table(box=box.SIMPLE)
    table.add_column("NAME", style="cyan", no_wrap=True)
    table.add_column("VERSION", style="magenta", no_wrap=True)
    table.add_column("STATUS", no_wrap=True)
    for cluster in clusters:
        table.add_row(cluster.name, f"v{cluster.version}", cluster.state)
    return table


async def list_clusters(
    ctx: typer.Context,
    server: ServerOption = None,
    user: UserOption = None,
    port: PortOption = DEFAULT_PORT,
    insecure: InsecureOption = False,
    keyring: KeyringOption = False,
):
    """Get the list of k8s clusters.

    Return the list of all kubernetes cluster running on the targeted Nutanix Karbon platform.

    Examples:
        # List the clusters known to Prism Central
        kubectl karbon list --server pc.example.com
    """
    try:
        async with await connect(ctx, server, user, port, insecure, keyring) as api:
            clusters = await api.list_clusters()
    except CLI_ERRORS as e:
        fail(e)

    console.print(cluster_table(clusters))
