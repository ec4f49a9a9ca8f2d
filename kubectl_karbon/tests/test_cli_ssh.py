# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import pytest
import yaml
from kubectl_karbon.cli import app
from typer.testing import CliRunner

runner = CliRunner()

SSH = ["ssh", "--server", "pc.example.com", "--cluster", "alpha"]


@pytest.fixture(autouse=True)
def password(monkeypatch):
    monkeypatch.setenv("KARBON_PASSWORD", "nutanix/4u")


@pytest.fixture
def ssh_route(karbon_api, ssh_response):
    return karbon_api.get("/karbon/v1/k8s/clusters/alpha/ssh").respond(
        200, json=ssh_response
    )


def test_ssh_agent(ssh_agent, ssh_route):
    result = runner.invoke(app, SSH)
    assert result.exit_code == 0, result.output
    assert ssh_route.called
    assert "SSH key for cluster alpha added to ssh-agent" in result.output
    assert {key.comment for key in ssh_agent.keys} == {"karbon cluster alpha"}


def test_ssh_file(home, ssh_route, ssh_response):
    result = runner.invoke(app, [*SSH, "--no-agent", "--file"])
    assert result.exit_code == 0, result.output
    assert "SSH key for cluster alpha written to" in result.output
    assert (home / ".ssh" / "alpha").read_text() == ssh_response["private_key"]


def test_ssh_file_force(home, ssh_route, ssh_response):
    (home / ".ssh").mkdir()
    (home / ".ssh" / "alpha-cert.pub").write_text("old cert")

    result = runner.invoke(app, [*SSH, "--no-agent", "--file"])
    assert result.exit_code == 1
    assert "use force option" in result.output

    result = runner.invoke(app, [*SSH, "--no-agent", "--file", "--force"])
    assert result.exit_code == 0, result.output
    assert (home / ".ssh" / "alpha-cert.pub").read_text() == ssh_response[
        "certificate"
    ]


def test_ssh_without_agent(ssh_route):
    result = runner.invoke(app, SSH)
    assert result.exit_code == 1
    assert "SSH_AUTH_SOCK" in result.output


def test_ssh_missing_cluster():
    result = runner.invoke(app, ["ssh", "--server", "pc.example.com"])
    assert result.exit_code == 2
    assert "cluster" in result.output


def test_ssh_unknown_cluster(karbon_api):
    karbon_api.get("/karbon/v1/k8s/clusters/nope/ssh").respond(404)
    result = runner.invoke(
        app, ["ssh", "--server", "pc.example.com", "--cluster", "nope"]
    )
    assert result.exit_code == 1
    assert "karbon cluster not found" in result.output


def test_ssh_cluster_from_config_file(home, ssh_route, ssh_response):
    (home / ".kubectl-karbon.yaml").write_text(
        yaml.safe_dump({"server": "pc.example.com", "cluster": "alpha"})
    )
    result = runner.invoke(app, ["ssh", "--no-agent", "--file"])
    assert result.exit_code == 0, result.output
    assert ssh_route.called
    assert (home / ".ssh" / "alpha").read_text() == ssh_response["private_key"]


def test_ssh_cluster_list_in_config_file(home, ssh_route):
    (home / ".kubectl-karbon.yaml").write_text(
        yaml.safe_dump({"server": "pc.example.com", "cluster": ["alpha", "beta"]})
    )
    result = runner.invoke(app, ["ssh", "--no-agent", "--file"])
    assert result.exit_code == 1
    assert "must be a single value" in result.output
    assert not ssh_route.called
