# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import karbon
from kubectl_karbon.cli import app
from typer.testing import CliRunner

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "Client Version" in result.output
    assert karbon.__version__ in result.output
    assert "Platform" in result.output


def test_version_yaml():
    result = runner.invoke(app, ["version", "-o", "yaml"])
    assert result.exit_code == 0
    assert "clientVersion:" in result.output
    assert "gitVersion" in result.output


def test_version_json():
    result = runner.invoke(app, ["version", "-o", "json"])
    assert result.exit_code == 0
    assert '"clientVersion"' in result.output
    assert f'"gitVersion": "{karbon.__version__}"' in result.output


def test_version_invalid_output():
    result = runner.invoke(app, ["version", "-o", "foo"])
    assert result.exit_code == 1
