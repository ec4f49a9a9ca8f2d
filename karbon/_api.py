# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
from __future__ import annotations

import contextlib
import json
import logging
from typing import AsyncGenerator

import anyio.to_thread
import httpx

from ._auth import KarbonAuth
from ._constants import (
    CLUSTER_LIST_URL,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    KUBECONFIG_URL,
    SSH_URL,
)
from ._exceptions import (
    APIConnectionError,
    APITimeoutError,
    AuthenticationError,
    NotFoundError,
    ServerError,
)
from ._objects import KarbonCluster, SSHCredentials
from ._types import PromptType

logger = logging.getLogger(__name__)


class Api:
    """A client for the Karbon REST API served by Prism Central.

    Awaiting the object resolves the credentials, prompting for a password if needed.

    Examples:
        >>> import karbon
        >>> async with await karbon.api(server="pc.example.com") as api:
        ...     clusters = await api.list_clusters()
    """

    def __init__(
        self,
        server: str,
        username: str | None = None,
        port: int = DEFAULT_PORT,
        timeout: float | None = DEFAULT_TIMEOUT,
        insecure: bool = False,
        use_keyring: bool = False,
        prompt: PromptType | None = None,
    ) -> None:
        self.auth = KarbonAuth(
            server=server,
            username=username,
            use_keyring=use_keyring,
            prompt=prompt,
        )
        self.port = port
        self.insecure = insecure
        self._timeout = timeout
        self._session: httpx.AsyncClient | None = None

    def __await__(self):
        async def f():
            await self.auth
            return self

        return f().__await__()

    async def __aenter__(self) -> Api:
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    @property
    def url(self) -> str:
        return f"https://{self.auth.server}:{self.port}"

    @property
    def timeout(self):
        return self._timeout

    @timeout.setter
    def timeout(self, value):
        self._timeout = value
        if self._session:
            self._session.timeout = httpx.Timeout(value)

    async def _create_session(self) -> None:
        if self._session:
            with contextlib.suppress(RuntimeError):
                await self._session.aclose()
            self._session = None
        self._session = httpx.AsyncClient(
            base_url=self.url,
            auth=httpx.BasicAuth(self.auth.username, self.auth.password or ""),
            headers={"Accept": "application/json"},
            verify=not self.insecure,
            timeout=self._timeout,
            follow_redirects=True,
        )

    async def close(self) -> None:
        if self._session:
            await self._session.aclose()
            self._session = None

    @contextlib.asynccontextmanager
    async def call_api(
        self,
        method: str = "GET",
        url: str = "",
        **kwargs,
    ) -> AsyncGenerator[httpx.Response]:
        """Make a Karbon API request."""
        if not self._session or self._session.is_closed:
            await self._create_session()
        assert self._session
        logger.debug("%s %s%s", method, self.url, url)
        try:
            response = await self._session.request(method=method, url=url, **kwargs)
        except httpx.TimeoutException as e:
            raise APITimeoutError(
                "Timeout while waiting for the Karbon API server"
            ) from e
        except httpx.TransportError as e:
            raise APIConnectionError(f"Unable to connect to {self.url}: {e}") from e
        if response.status_code == 401:
            # Drop a stale stored password so the next run prompts again
            if self.auth.use_keyring:
                await anyio.to_thread.run_sync(self.auth.forget)
            raise AuthenticationError("invalid client credentials")
        if response.status_code == 404:
            raise NotFoundError("karbon cluster not found")
        if response.status_code != 200:
            raise ServerError(
                "internal error", status=response.status_code, response=response
            )
        yield response

    async def _get_json(self, url: str):
        async with self.call_api("GET", url) as response:
            try:
                return response.json()
            except json.JSONDecodeError as e:
                raise ServerError(
                    f"invalid JSON response from {url}",
                    status=response.status_code,
                    response=response,
                ) from e

    async def list_clusters(self) -> list[KarbonCluster]:
        """List the Kubernetes clusters managed by Karbon.

        Returns:
            The clusters, in the order returned by the server.
        """
        logger.info("Retrieve cluster list")
        data = await self._get_json(CLUSTER_LIST_URL)
        return [KarbonCluster.from_dict(cluster) for cluster in data or []]

    async def get_kubeconfig(self, cluster: str) -> str:
        """Download the kubeconfig of a cluster.

        Args:
            cluster: The name of the Karbon cluster.

        Returns:
            The kubeconfig document as a YAML string.
        """
        logger.info(
            "Connect on %s/ and retrieve Kubeconfig for cluster %s", self.url, cluster
        )
        data = await self._get_json(KUBECONFIG_URL.format(cluster=cluster))
        try:
            return data["kube_config"]
        except (KeyError, TypeError) as e:
            raise ServerError(f"no kubeconfig returned for cluster {cluster}") from e

    async def get_ssh_credentials(self, cluster: str) -> SSHCredentials:
        """Request short-lived SSH credentials for the nodes of a cluster.

        Args:
            cluster: The name of the Karbon cluster.

        Returns:
            The SSH certificate and private key with their expiry time.
        """
        logger.info(
            "Connect on %s/ and retrieve SSH key/cert for cluster %s", self.url, cluster
        )
        data = await self._get_json(SSH_URL.format(cluster=cluster))
        if not isinstance(data, dict):
            raise ServerError(f"no SSH credentials returned for cluster {cluster}")
        return SSHCredentials.from_dict(data)
