# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
"""Objects returned by the Karbon API."""
from __future__ import annotations

import datetime
from dataclasses import dataclass


@dataclass
class KarbonCluster:
    """A Kubernetes cluster managed by Karbon."""

    name: str
    uuid: str = ""
    status: str = ""
    version: str = ""
    kubeapi_server_ipv4_address: str = ""
    deployment_type: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> KarbonCluster:
        master_config = data.get("master_config") or {}
        return cls(
            name=data["name"],
            uuid=data.get("uuid", ""),
            status=data.get("status", ""),
            version=data.get("version", ""),
            kubeapi_server_ipv4_address=data.get("kubeapi_server_ipv4_address", ""),
            deployment_type=master_config.get("deployment_type", ""),
        )

    @property
    def state(self) -> str:
        """Cluster status without the ``k`` enum prefix, e.g. ``kActive`` -> ``Active``."""
        if self.status.startswith("k"):
            return self.status[1:]
        return self.status


@dataclass
class SSHCredentials:
    """A short-lived SSH certificate and private key for the cluster nodes."""

    certificate: str
    private_key: str
    username: str = ""
    expiry_time: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> SSHCredentials:
        return cls(
            certificate=data.get("certificate", ""),
            private_key=data.get("private_key", ""),
            username=data.get("username", ""),
            expiry_time=data.get("expiry_time", ""),
        )

    @property
    def expiry(self) -> datetime.datetime:
        """Parse ``expiry_time`` (``2006-01-02T15:04:05.000Z``) as an aware UTC datetime."""
        if not self.expiry_time:
            raise ValueError("SSH credentials have no expiry time")
        expiry = datetime.datetime.fromisoformat(self.expiry_time.replace("Z", "+00:00"))
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=datetime.timezone.utc)
        return expiry

    def lifetime(self, now: datetime.datetime | None = None) -> int:
        """Whole seconds left before the credentials expire, never negative."""
        if now is None:
            now = datetime.datetime.now(datetime.timezone.utc)
        return max(int((self.expiry - now).total_seconds()), 0)
