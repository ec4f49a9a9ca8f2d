# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
"""Options shared by the subcommands."""
from typing import List, Optional

import typer
from typing_extensions import Annotated

ServerOption = Annotated[
    Optional[str],
    typer.Option(
        "--server",
        envvar="KARBON_SERVER",
        help="Address of the PC to authenticate against",
    ),
]
UserOption = Annotated[
    Optional[str],
    typer.Option(
        "--user",
        "-u",
        envvar="KARBON_USER",
        help="Username to authenticate  [default: current user]",
    ),
]
PortOption = Annotated[
    int,
    typer.Option("--port", envvar="KARBON_PORT", help="Port to run Application server on"),
]
InsecureOption = Annotated[
    bool,
    typer.Option(
        "--insecure",
        "-k",
        envvar="KARBON_INSECURE",
        help="Skip certificate verification (this is insecure)",
    ),
]
KeyringOption = Annotated[
    bool,
    typer.Option(
        "--keyring",
        envvar="KARBON_KEYRING",
        help="Use keyring to store and retrieve credential",
    ),
]
ClustersOption = Annotated[
    Optional[List[str]],
    typer.Option(
        "--cluster",
        envvar="KARBON_CLUSTER",
        help="Karbon cluster(s) to connect to (multiple coma separated cluster names)",
    ),
]
KubieOption = Annotated[
    bool,
    typer.Option(
        "--kubie",
        envvar="KARBON_KUBIE",
        help="Store kubeconfig in independent file in kubie-path directory",
    ),
]
KubiePathOption = Annotated[
    str,
    typer.Option(
        "--kubie-path",
        envvar="KARBON_KUBIE_PATH",
        help="Path to kubie kubeconfig directory",
    ),
]
MergeOption = Annotated[
    bool,
    typer.Option(
        "--merge",
        envvar="KARBON_MERGE",
        help="Use context feature for kubeconfig",
    ),
]
ForceOption = Annotated[
    bool,
    typer.Option(
        "--force",
        envvar="KARBON_FORCE",
        help="Overwrite file(s) if already exist",
    ),
]

__all__ = [
    "ClustersOption",
    "ForceOption",
    "InsecureOption",
    "KeyringOption",
    "KubieOption",
    "KubiePathOption",
    "MergeOption",
    "PortOption",
    "ServerOption",
    "UserOption",
]
