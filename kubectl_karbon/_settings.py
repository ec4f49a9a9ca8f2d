# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
"""Plugin configuration file and logging setup."""
import logging
import pathlib
from dataclasses import dataclass
from typing import Optional

import yaml
from rich.console import Console
from rich.logging import RichHandler

from karbon._constants import DEFAULT_KUBECONFIG, DEFAULT_TIMEOUT

DEFAULT_CONFIG_FILE = "~/.kubectl-karbon.yaml"


@dataclass
class Settings:
    """Global options shared by every subcommand."""

    kubeconfig: str = DEFAULT_KUBECONFIG
    request_timeout: int = DEFAULT_TIMEOUT
    config_file: Optional[pathlib.Path] = None


def load_config_file(path: Optional[str] = None) -> tuple[dict, Optional[pathlib.Path]]:
    """Load option defaults from the plugin config file.

    Keys are option names as written on the command line (``kubie-path``) or as
    Python identifiers (``kubie_path``).

    Args:
        path: Explicit config file. When omitted ``~/.kubectl-karbon.yaml`` is
            used if it exists.

    Returns:
        The defaults keyed by parameter name, and the file they were read from.
    """
    target = pathlib.Path(path or DEFAULT_CONFIG_FILE).expanduser()
    if not target.exists():
        if path:
            raise FileNotFoundError(f"Config file {target} does not exist")
        return {}, None
    data = yaml.safe_load(target.read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {target} is not a YAML mapping")

    defaults = {str(key).replace("-", "_"): value for key, value in data.items()}
    return defaults, target


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=debug,
            )
        ],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)
    logging.getLogger("asyncssh").setLevel(logging.DEBUG if debug else logging.WARNING)
