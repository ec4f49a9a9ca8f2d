# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import logging
import pathlib
from typing import Dict, List, Optional, Union

import anyio
import yaml

from ._constants import DEFAULT_KUBIE_PATH
from ._data_utils import merge_named_lists
from ._types import PathType

logger = logging.getLogger(__name__)

SECTIONS = (("clusters", "cluster"), ("users", "user"), ("contexts", "context"))


class KubeConfig:
    """A single kubeconfig document, loaded from a file or a dict."""

    def __init__(self, path_or_config: Union[PathType, Dict]):
        self.path: Optional[pathlib.Path] = None
        self._raw: dict = {}

        if not path_or_config:
            raise ValueError("KubeConfig path_or_config is None or empty.")
        if isinstance(path_or_config, (str, pathlib.Path)):
            self.path = pathlib.Path(path_or_config).expanduser()
            if not self.path.exists():
                raise ValueError(f"File {self.path} does not exist")
            if self.path.is_dir():
                raise IsADirectoryError(
                    f'Error loading config file "{self.path}": is a directory.'
                )
        elif isinstance(path_or_config, dict):
            self._raw = path_or_config
        else:
            raise TypeError("KubeConfig path_or_config must be a string, path or dict.")

        self.__write_lock = anyio.Lock()

    def __await__(self):
        async def f():
            if not self._raw:
                async with await anyio.open_file(self.path) as fh:
                    self._raw = yaml.safe_load(await fh.read()) or {}
                if not isinstance(self._raw, dict):
                    raise ValueError(f"Kubeconfig {self.path} is not a YAML mapping")
            return self

        return f().__await__()

    async def save(self, path: Optional[PathType] = None) -> None:
        """Write the kubeconfig, readable by the owner only."""
        path = pathlib.Path(path).expanduser() if path else self.path
        if not path:
            raise ValueError("No path provided")
        path = anyio.Path(path)
        async with self.__write_lock:
            await path.touch(mode=0o600, exist_ok=True)
            await path.chmod(0o600)
            await path.write_text(yaml.safe_dump(self._raw, default_flow_style=False))

    @property
    def raw(self) -> Dict:
        return self._raw

    @property
    def current_context(self) -> str:
        return self._raw.get("current-context") or ""

    async def use_context(self, context: str, allow_unknown: bool = False) -> None:
        """Set the current context."""
        if not allow_unknown and context not in [c["name"] for c in self.contexts]:
            raise ValueError(f"Context {context} not found")
        self._raw["current-context"] = context
        await self.save()

    def get_context(self, context_name: str) -> Dict:
        """Get a context by name."""
        for context in self.contexts:
            if context["name"] == context_name:
                return context["context"]
        raise ValueError(f"Context {context_name} not found")

    def get_cluster(self, cluster_name: str) -> Dict:
        """Get a cluster by name."""
        for cluster in self.clusters:
            if cluster["name"] == cluster_name:
                return cluster["cluster"]
        raise ValueError(f"Cluster {cluster_name} not found")

    def get_user(self, user_name: str) -> Dict:
        """Get a user by name."""
        for user in self.users:
            if user["name"] == user_name:
                return user["user"]
        raise ValueError(f"User {user_name} not found")

    def merge(self, other: Dict) -> None:
        """Merge another kubeconfig into this one.

        Clusters, users and contexts of ``other`` replace entries with the same
        name, and its current context becomes the current context.
        """
        self._raw.setdefault("apiVersion", other.get("apiVersion", "v1"))
        self._raw.setdefault("kind", other.get("kind", "Config"))
        self._raw["preferences"] = self.preferences or other.get("preferences") or {}
        for section, value in SECTIONS:
            self._raw[section] = merge_named_lists(
                self._raw.get(section) or [], other.get(section) or [], value
            )
        if other.get("current-context"):
            self._raw["current-context"] = other["current-context"]

    def remove_cluster(self, cluster_name: str) -> List[str]:
        """Remove a cluster, the contexts using it and the users left unreferenced.

        Returns:
            The names of the removed contexts.
        """
        removed = [
            c for c in self.contexts if c.get("context", {}).get("cluster") == cluster_name
        ]
        removed_names = [c["name"] for c in removed]
        self._raw["contexts"] = [
            c for c in self.contexts if c["name"] not in removed_names
        ]
        self._raw["clusters"] = [c for c in self.clusters if c["name"] != cluster_name]
        still_used = {c.get("context", {}).get("user") for c in self.contexts}
        orphans = {c.get("context", {}).get("user") for c in removed} - still_used
        self._raw["users"] = [u for u in self.users if u["name"] not in orphans]
        if self.current_context in removed_names:
            if self.contexts:
                self._raw["current-context"] = self.contexts[0]["name"]
            else:
                self._raw.pop("current-context", None)
        return removed_names

    @property
    def preferences(self) -> Dict:
        return self._raw.get("preferences") or {}

    @property
    def clusters(self) -> List[Dict]:
        return self._raw.get("clusters") or []

    @property
    def users(self) -> List[Dict]:
        return self._raw.get("users") or []

    @property
    def contexts(self) -> List[Dict]:
        return self._raw.get("contexts") or []


def resolve_kubeconfig_path(
    kubeconfig: PathType,
    cluster: str,
    kubie: bool = False,
    kubie_path: PathType = DEFAULT_KUBIE_PATH,
) -> pathlib.Path:
    """Return where the kubeconfig of ``cluster`` is stored.

    With kubie every cluster gets its own ``<cluster>.yaml`` file in ``kubie_path``.
    """
    if kubie:
        return pathlib.Path(kubie_path).expanduser() / f"{cluster}.yaml"
    return pathlib.Path(kubeconfig).expanduser()


async def save_kubeconfig(path: PathType, kubeconfig: str, merge: bool = False) -> None:
    """Store a kubeconfig downloaded from Karbon.

    Args:
        path: Destination file, ``~`` is expanded.
        kubeconfig: The kubeconfig document as a YAML string.
        merge: Merge into an existing file instead of replacing it.
    """
    new = yaml.safe_load(kubeconfig)
    if not isinstance(new, dict):
        raise ValueError("Karbon returned an invalid kubeconfig")
    target = anyio.Path(pathlib.Path(path).expanduser())
    await target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    if merge and await target.exists():
        config = await KubeConfig(pathlib.Path(target))
        config.merge(new)
        await config.save()
    else:
        await KubeConfig(new).save(target)
    logger.info("Kubeconfig file %s successfully written", target)


async def delete_kubeconfig(path: PathType) -> None:
    target = anyio.Path(pathlib.Path(path).expanduser())
    await target.unlink()
    logger.info("Kubeconfig file %s successfully deleted", target)


async def remove_cluster_from_kubeconfig(path: PathType, cluster: str) -> List[str]:
    """Remove a cluster from a merged kubeconfig file, returning the removed contexts."""
    target = pathlib.Path(path).expanduser()
    if not target.exists():
        raise FileNotFoundError(f"Kubeconfig {target} does not exist")
    config = await KubeConfig(target)
    removed = config.remove_cluster(cluster)
    await config.save()
    logger.info("Cluster %s removed from kubeconfig %s", cluster, target)
    return removed
