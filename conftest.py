# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import datetime
from collections.abc import Generator

import asyncssh
import keyring
import keyring.backend
import keyring.errors
import pytest
import respx
import yaml

from karbon import SSHCredentials

PC_SERVER = "pc.example.com"
PC_URL = f"https://{PC_SERVER}:9440"

CLEARED_ENV = (
    "KARBON_PASSWORD",
    "KARBON_SERVER",
    "KARBON_USER",
    "KARBON_CLUSTER",
    "KUBECONFIG",
    "SSH_AUTH_SOCK",
)


class MemoryKeyring(keyring.backend.KeyringBackend):
    """A keyring that never leaves the test process."""

    priority = 1  # type: ignore

    def __init__(self):
        super().__init__()
        self.passwords = {}

    def get_password(self, service, username):
        return self.passwords.get((service, username))

    def set_password(self, service, username, password):
        self.passwords[(service, username)] = password

    def delete_password(self, service, username):
        try:
            del self.passwords[(service, username)]
        except KeyError:
            raise keyring.errors.PasswordDeleteError("Password not found")


class FakeAgentKey:
    def __init__(self, comment, lifetime, cert):
        self.comment = comment
        self.lifetime = lifetime
        self.cert = cert

    def get_comment(self):
        return self.comment


class FakeAgent:
    """Just enough of asyncssh.SSHAgentClient to manage identities."""

    def __init__(self):
        self.keys = []
        self.closed = False
        self.path = None

    async def get_keys(self):
        return list(self.keys)

    async def add_keys(self, keylist, lifetime=None):
        for key, cert in keylist:
            self.keys.append(FakeAgentKey(key.get_comment(), lifetime, cert))

    async def remove_keys(self, keylist):
        for key in keylist:
            self.keys.remove(key)

    def close(self):
        self.closed = True

    async def wait_closed(self):
        pass


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch):
    """Run every test with an empty home directory and a clean environment."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in CLEARED_ENV:
        monkeypatch.delenv(name, raising=False)
    yield home


@pytest.fixture(autouse=True)
def memory_keyring() -> Generator[MemoryKeyring, None, None]:
    backend = MemoryKeyring()
    keyring.set_keyring(backend)
    yield backend


@pytest.fixture
def ssh_agent(monkeypatch, tmp_path):
    agent = FakeAgent()

    async def connect_agent(agent_path=()):
        agent.path = agent_path
        agent.closed = False
        return agent

    monkeypatch.setattr(asyncssh, "connect_agent", connect_agent)
    monkeypatch.setenv("SSH_AUTH_SOCK", str(tmp_path / "agent.sock"))
    yield agent


@pytest.fixture(scope="session")
def ssh_keypair():
    ca_key = asyncssh.generate_private_key("ssh-ed25519")
    user_key = asyncssh.generate_private_key("ssh-ed25519")
    cert = ca_key.generate_user_certificate(user_key, "karbon", principals=["nutanix"])
    return (
        user_key.export_private_key().decode(),
        cert.export_certificate().decode(),
    )


@pytest.fixture
def ssh_credentials(ssh_keypair) -> SSHCredentials:
    private_key, certificate = ssh_keypair
    expiry = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=1)
    return SSHCredentials(
        certificate=certificate,
        private_key=private_key,
        username="nutanix",
        expiry_time=expiry.strftime("%Y-%m-%dT%H:%M:%S.000Z"),
    )


@pytest.fixture
def ssh_response(ssh_credentials) -> dict:
    return {
        "certificate": ssh_credentials.certificate,
        "private_key": ssh_credentials.private_key,
        "username": ssh_credentials.username,
        "expiry_time": ssh_credentials.expiry_time,
    }


def make_kubeconfig(cluster: str) -> str:
    """A kubeconfig shaped like the ones Karbon hands out."""
    user = f"default-{cluster}-token"
    return yaml.safe_dump(
        {
            "apiVersion": "v1",
            "kind": "Config",
            "clusters": [
                {
                    "name": cluster,
                    "cluster": {
                        "server": "https://10.0.0.10:443",
                        "certificate-authority-data": "Zm9vYmFy",
                    },
                }
            ],
            "users": [{"name": user, "user": {"token": f"{cluster}-token"}}],
            "contexts": [
                {
                    "name": f"{cluster}-context",
                    "context": {"cluster": cluster, "user": user},
                }
            ],
            "current-context": f"{cluster}-context",
        }
    )


@pytest.fixture
def kubeconfig_factory():
    return make_kubeconfig


@pytest.fixture
def clusters_response() -> list:
    return [
        {
            "name": "alpha",
            "uuid": "6c1ad3f8-0a4a-4a8e-9c11-000000000001",
            "status": "kActive",
            "version": "1.28.7-0",
            "kubeapi_server_ipv4_address": "10.0.0.10",
            "master_config": {"deployment_type": "kSingleMaster"},
        },
        {
            "name": "beta",
            "uuid": "6c1ad3f8-0a4a-4a8e-9c11-000000000002",
            "status": "kUpgrading",
            "version": "1.29.3-0",
            "kubeapi_server_ipv4_address": "10.0.0.20",
            "master_config": {"deployment_type": "kMultiMaster"},
        },
    ]


@pytest.fixture
def karbon_api() -> Generator[respx.MockRouter, None, None]:
    """Mock the Prism Central API; routes are added by each test."""
    with respx.mock(base_url=PC_URL, assert_all_called=False) as mock:
        yield mock
