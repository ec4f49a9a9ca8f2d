# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
"""
This module contains `karbon`, an async Python client for the Nutanix Karbon API.

It handles the session lifecycle of a Karbon Kubernetes cluster: downloading its
kubeconfig and provisioning short-lived SSH credentials for its nodes.
"""
from typing import Optional

from ._api import Api
from ._auth import KarbonAuth
from ._config import (
    KubeConfig,
    delete_kubeconfig,
    remove_cluster_from_kubeconfig,
    resolve_kubeconfig_path,
    save_kubeconfig,
)
from ._constants import DEFAULT_PORT, DEFAULT_TIMEOUT
from ._exceptions import (
    APIConnectionError,
    APITimeoutError,
    AuthenticationError,
    KarbonError,
    NotFoundError,
    ServerError,
    SSHAgentError,
)
from ._objects import KarbonCluster, SSHCredentials
from ._ssh import (
    add_key_to_agent,
    delete_key_files,
    remove_key_from_agent,
    save_key_files,
)
from ._types import PromptType

__version__ = "0.1.0"


async def api(
    server: str,
    username: Optional[str] = None,
    port: int = DEFAULT_PORT,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    insecure: bool = False,
    use_keyring: bool = False,
    prompt: Optional[PromptType] = None,
) -> Api:
    """Create a :class:`karbon.Api` with resolved credentials.

    Args:
        server: Address of Prism Central
        username: User to authenticate as, defaults to the current OS user
        port: Port Prism Central listens on
        timeout: Request timeout in seconds
        insecure: Skip TLS certificate verification
        use_keyring: Read and store the password in the OS keyring
        prompt: Called to ask for the password when none is stored

    Returns:
        The API object

    Examples:
        >>> import karbon
        >>> api = await karbon.api(server="pc.example.com", use_keyring=True)
        >>> kubeconfig = await api.get_kubeconfig("my-cluster")
    """
    return await Api(
        server=server,
        username=username,
        port=port,
        timeout=timeout,
        insecure=insecure,
        use_keyring=use_keyring,
        prompt=prompt,
    )


__all__ = [
    "__version__",
    "api",
    "add_key_to_agent",
    "delete_key_files",
    "delete_kubeconfig",
    "remove_cluster_from_kubeconfig",
    "remove_key_from_agent",
    "resolve_kubeconfig_path",
    "save_key_files",
    "save_kubeconfig",
    "Api",
    "APIConnectionError",
    "APITimeoutError",
    "AuthenticationError",
    "KarbonAuth",
    "KarbonCluster",
    "KarbonError",
    "KubeConfig",
    "NotFoundError",
    "ServerError",
    "SSHAgentError",
    "SSHCredentials",
]
