# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
"""Store Karbon SSH credentials in ``~/.ssh`` or hand them to an SSH agent."""
from __future__ import annotations

import logging
import os
import pathlib
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import anyio
import asyncssh

from ._constants import DEFAULT_SSH_DIR, SSH_KEY_COMMENT
from ._exceptions import SSHAgentError
from ._objects import SSHCredentials
from ._types import PathType

logger = logging.getLogger(__name__)


def key_file_paths(
    cluster: str, ssh_dir: PathType | None = None
) -> tuple[pathlib.Path, pathlib.Path]:
    """Return the private key and certificate paths for a cluster."""
    directory = pathlib.Path(ssh_dir or DEFAULT_SSH_DIR).expanduser()
    return directory / cluster, directory / f"{cluster}-cert.pub"


async def save_key_files(
    cluster: str,
    credentials: SSHCredentials,
    force: bool = False,
    ssh_dir: PathType | None = None,
) -> tuple[pathlib.Path, pathlib.Path]:
    """Write the private key and certificate of a cluster.

    Args:
        cluster: The Karbon cluster name, used as the key file name.
        credentials: The credentials returned by the Karbon API.
        force: Overwrite files that already exist.
        ssh_dir: Directory to write to, defaults to ``~/.ssh``.

    Returns:
        The paths of the private key and certificate files.

    Raises:
        FileExistsError: If a file exists and ``force`` is not set.
    """
    private_key_file, certificate_file = key_file_paths(cluster, ssh_dir)
    await anyio.Path(private_key_file.parent).mkdir(
        mode=0o700, parents=True, exist_ok=True
    )

    if not force:
        for path in (private_key_file, certificate_file):
            if await anyio.Path(path).exists():
                raise FileExistsError(
                    f"file {path} already exist, use force option to overwrite it"
                )

    for path, content in (
        (private_key_file, credentials.private_key),
        (certificate_file, credentials.certificate),
    ):
        apath = anyio.Path(path)
        await apath.touch(mode=0o600, exist_ok=True)
        await apath.chmod(0o600)
        await apath.write_text(content)

    logger.info("privateKey file %s successfully written", private_key_file)
    logger.info("certificate file %s successfully written", certificate_file)
    return private_key_file, certificate_file


async def delete_key_files(cluster: str, ssh_dir: PathType | None = None) -> None:
    """Delete the private key and certificate of a cluster.

    Raises:
        FileNotFoundError: If one of the files does not exist.
    """
    private_key_file, certificate_file = key_file_paths(cluster, ssh_dir)
    await anyio.Path(private_key_file).unlink()
    logger.info("privateKey file %s successfully deleted", private_key_file)
    await anyio.Path(certificate_file).unlink()
    logger.info("certificate file %s successfully deleted", certificate_file)


@asynccontextmanager
async def connect_agent() -> AsyncGenerator[asyncssh.SSHAgentClient]:
    """Connect to the SSH agent listening on ``SSH_AUTH_SOCK``."""
    socket = os.environ.get("SSH_AUTH_SOCK")
    if not socket:
        raise SSHAgentError("SSH_AUTH_SOCK environment variable not set")
    try:
        agent = await asyncssh.connect_agent(socket)
    except (OSError, asyncssh.Error) as e:
        raise SSHAgentError(f"Unable to connect to SSH agent at {socket}: {e}") from e
    try:
        yield agent
    finally:
        agent.close()
        await agent.wait_closed()


async def _remove_matching(agent: asyncssh.SSHAgentClient, comment: str) -> int:
    keys = [
        key for key in await agent.get_keys() if key.get_comment() == comment
    ]
    if keys:
        await agent.remove_keys(keys)
    return len(keys)


async def add_key_to_agent(cluster: str, credentials: SSHCredentials) -> None:
    """Add the cluster private key and certificate to the SSH agent.

    The identity expires from the agent when the certificate does. An identity
    left over from a previous login to the same cluster is replaced.

    Raises:
        SSHAgentError: If the agent is unreachable, the key cannot be parsed or
            the credentials have already expired.
    """
    lifetime = credentials.lifetime()
    if lifetime <= 0:
        raise SSHAgentError(
            f"SSH credentials for cluster {cluster} expired at {credentials.expiry_time}"
        )
    try:
        key = asyncssh.import_private_key(credentials.private_key)
        cert = asyncssh.import_certificate(credentials.certificate)
    except (asyncssh.KeyImportError, ValueError) as e:
        raise SSHAgentError(
            f"Invalid SSH key/cert returned for cluster {cluster}: {e}"
        ) from e
    comment = SSH_KEY_COMMENT.format(cluster=cluster)
    key.set_comment(comment)
    cert.set_comment(comment)

    async with connect_agent() as agent:
        await _remove_matching(agent, comment)
        try:
            await agent.add_keys([(key, cert)], lifetime=lifetime)
        except ValueError as e:
            raise SSHAgentError(f"SSH agent refused key: {e}") from e
    logger.info("SSH key for cluster '%s' added to ssh-agent", cluster)


async def remove_key_from_agent(cluster: str) -> int:
    """Remove the identities of a cluster from the SSH agent.

    Returns:
        The number of identities removed.
    """
    async with connect_agent() as agent:
        removed = await _remove_matching(agent, SSH_KEY_COMMENT.format(cluster=cluster))
    if removed:
        logger.info("SSH key for cluster '%s' deleted from ssh-agent", cluster)
    return removed
