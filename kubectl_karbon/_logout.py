# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import anyio.to_thread
import typer
from typing_extensions import Annotated

import karbon
from karbon._constants import DEFAULT_KUBIE_PATH

from ._options import (
    ClustersOption,
    KeyringOption,
    KubieOption,
    KubiePathOption,
    MergeOption,
    ServerOption,
    UserOption,
)
from ._settings import Settings
from ._typer_utils import CLI_ERRORS, require, split_clusters


async def logout(
    ctx: typer.Context,
    cluster: ClustersOption = None,
    server: ServerOption = None,
    user: UserOption = None,
    kubie: KubieOption = False,
    kubie_path: KubiePathOption = DEFAULT_KUBIE_PATH,
    merge: MergeOption = False,
    keyring: KeyringOption = False,
    ssh_agent: Annotated[
        bool,
        typer.Option(
            "--ssh-agent",
            envvar="KARBON_SSH_AGENT",
            help="Remove Key and Cert from SSH agent",
        ),
    ] = False,
    ssh_file: Annotated[
        bool,
        typer.Option(
            "--ssh-file",
            envvar="KARBON_SSH_FILE",
            help="Delete Key and Cert from ~/.ssh/ directory",
        ),
    ] = False,
):
    """Destroys current sessions with Karbon clusters.

    Remove the local kubeconfig file, or only the given clusters with --kubie
    or --merge, and optionally the SSH credentials and the stored password.

    Examples:
        # Remove the kubeconfig file
        kubectl karbon logout

        # Forget a merged cluster and its SSH key in the agent
        kubectl karbon logout --merge --cluster my-cluster --ssh-agent
    """
    settings = ctx.find_object(Settings) or Settings()
    clusters = split_clusters(cluster)
    if kubie or merge or ssh_agent or ssh_file:
        require(ctx, clusters, "cluster")
    if keyring:
        require(ctx, server, "server")
    failed = False

    def report(error) -> None:
        nonlocal failed
        failed = True
        typer.echo(f"Error: {error}", err=True)

    if kubie or merge:
        for name in clusters:
            try:
                if kubie:
                    await karbon.delete_kubeconfig(
                        karbon.resolve_kubeconfig_path(
                            settings.kubeconfig, name, kubie=True, kubie_path=kubie_path
                        )
                    )
                else:
                    await karbon.remove_cluster_from_kubeconfig(settings.kubeconfig, name)
            except CLI_ERRORS as e:
                report(e)
            else:
                typer.echo(f"Kubeconfig for cluster {name} successfully deleted")
    else:
        try:
            await karbon.delete_kubeconfig(settings.kubeconfig)
        except CLI_ERRORS as e:
            report(e)
        else:
            typer.echo("Kubeconfig successfully deleted")

    for name in clusters:
        if ssh_file:
            try:
                await karbon.delete_key_files(name)
            except CLI_ERRORS as e:
                report(e)
        if ssh_agent:
            try:
                await karbon.remove_key_from_agent(name)
            except CLI_ERRORS as e:
                report(e)

    if keyring:
        try:
            auth = karbon.KarbonAuth(server=server, username=user, use_keyring=True)
            await anyio.to_thread.run_sync(auth.forget)
        except CLI_ERRORS as e:
            report(e)

    if failed:
        raise typer.Exit(code=1)
