# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import asyncio

import yaml
from kubectl_karbon.cli import app
from typer.testing import CliRunner

import karbon

runner = CliRunner()

SERVICE = "kubectl-karbon pc.example.com"


def write_kubeconfig(path, kubeconfig_factory, *clusters, merge=False):
    for name in clusters:
        asyncio.run(karbon.save_kubeconfig(path, kubeconfig_factory(name), merge=merge))


def test_logout(home, kubeconfig_factory):
    kubeconfig = home / ".kube" / "config"
    kubeconfig.parent.mkdir()
    kubeconfig.write_text(kubeconfig_factory("alpha"))

    result = runner.invoke(app, ["logout"])
    assert result.exit_code == 0, result.output
    assert "Kubeconfig successfully deleted" in result.output
    assert not kubeconfig.exists()


def test_logout_missing_kubeconfig():
    result = runner.invoke(app, ["logout"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_logout_merge(home, kubeconfig_factory):
    kubeconfig = home / ".kube" / "config"
    write_kubeconfig(kubeconfig, kubeconfig_factory, "alpha", "beta", merge=True)

    result = runner.invoke(app, ["logout", "--merge", "--cluster", "beta"])
    assert result.exit_code == 0, result.output
    assert "Kubeconfig for cluster beta successfully deleted" in result.output

    config = yaml.safe_load(kubeconfig.read_text())
    assert [c["name"] for c in config["clusters"]] == ["alpha"]
    assert config["current-context"] == "alpha-context"


def test_logout_kubie(home, kubeconfig_factory):
    kubie = home / ".kube" / "kubie"
    for name in ("alpha", "beta"):
        write_kubeconfig(kubie / f"{name}.yaml", kubeconfig_factory, name)

    result = runner.invoke(app, ["logout", "--kubie", "--cluster", "alpha"])
    assert result.exit_code == 0, result.output
    assert not (kubie / "alpha.yaml").exists()
    assert (kubie / "beta.yaml").exists()


def test_logout_merge_requires_cluster():
    result = runner.invoke(app, ["logout", "--merge"])
    assert result.exit_code == 2
    assert "cluster" in result.output


def test_logout_ssh_file(home, kubeconfig_factory, ssh_credentials):
    write_kubeconfig(home / ".kube" / "config", kubeconfig_factory, "alpha")
    key_file, cert_file = asyncio.run(karbon.save_key_files("alpha", ssh_credentials))

    result = runner.invoke(app, ["logout", "--cluster", "alpha", "--ssh-file"])
    assert result.exit_code == 0, result.output
    assert not key_file.exists()
    assert not cert_file.exists()


def test_logout_ssh_file_missing(home, kubeconfig_factory):
    kubeconfig = home / ".kube" / "config"
    kubeconfig.parent.mkdir()
    kubeconfig.write_text(kubeconfig_factory("alpha"))

    result = runner.invoke(app, ["logout", "--cluster", "alpha", "--ssh-file"])
    assert result.exit_code == 1
    assert not kubeconfig.exists()


def test_logout_ssh_agent(home, ssh_agent, kubeconfig_factory, ssh_credentials):
    write_kubeconfig(home / ".kube" / "config", kubeconfig_factory, "alpha")
    asyncio.run(karbon.add_key_to_agent("alpha", ssh_credentials))
    asyncio.run(karbon.add_key_to_agent("beta", ssh_credentials))

    result = runner.invoke(app, ["logout", "--cluster", "alpha", "--ssh-agent"])
    assert result.exit_code == 0, result.output
    assert {key.comment for key in ssh_agent.keys} == {"karbon cluster beta"}


def test_logout_keyring(home, memory_keyring, kubeconfig_factory):
    kubeconfig = home / ".kube" / "config"
    kubeconfig.parent.mkdir()
    kubeconfig.write_text(kubeconfig_factory("alpha"))
    memory_keyring.passwords[(SERVICE, "admin")] = "nutanix/4u"

    result = runner.invoke(
        app, ["logout", "--keyring", "--server", "pc.example.com", "--user", "admin"]
    )
    assert result.exit_code == 0, result.output
    assert memory_keyring.passwords == {}


def test_logout_keyring_requires_server():
    result = runner.invoke(app, ["logout", "--keyring"])
    assert result.exit_code == 2
    assert "server" in result.output


def test_logout_missing_kubeconfig_still_forgets_keyring(memory_keyring):
    memory_keyring.passwords[(SERVICE, "admin")] = "nutanix/4u"

    result = runner.invoke(
        app, ["logout", "--keyring", "--server", "pc.example.com", "--user", "admin"]
    )
    assert result.exit_code == 1
    assert "Kubeconfig successfully deleted" not in result.output
    assert memory_keyring.passwords == {}
