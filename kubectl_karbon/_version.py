# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import json
import platform
import sys

import typer
import yaml
from rich.console import Console
from rich.syntax import Syntax

import karbon

console = Console()


def version(
    output: str = typer.Option(
        "",
        "-o",
        "--output",
        help="One of 'yaml' or 'json'.",
    ),
):
    """Print the client version information.

    Examples:
        # Print the plugin version
        kubectl karbon version
    """
    versions = {
        "clientVersion": {
            "client": "kubectl-karbon",
            "gitVersion": karbon.__version__,
            "major": karbon.__version__.split(".")[0],
            "minor": karbon.__version__.split(".")[1],
            "pythonVersion": sys.version,
            "platform": f"{platform.system().lower()}/{platform.machine()}",
        }
    }

    if output == "":
        style = "[magenta][bold]"
        console.print(f"Client Version: {style}v{karbon.__version__}")
        console.print(f"Platform: {style}{versions['clientVersion']['platform']}")

    elif output == "yaml":
        console.print(
            Syntax(
                yaml.dump(versions),
                "yaml",
                background_color="default",
            )
        )

    elif output == "json":
        console.print(
            Syntax(
                json.dumps(versions, indent=2),
                "json",
                background_color="default",
            )
        )

    else:
        console.print("error: --output must be 'yaml' or 'json'")
        raise typer.Exit(code=1)
