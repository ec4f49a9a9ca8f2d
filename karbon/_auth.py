# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import getpass
import logging
import os
from typing import Optional

import anyio
import anyio.to_thread
import keyring
import keyring.errors

from ._constants import KEYRING_SERVICE, PASSWORD_ENV
from ._types import PromptType

logger = logging.getLogger(__name__)


class KarbonAuth:
    """Resolve Prism Central credentials from the environment, the keyring or a prompt."""

    def __init__(
        self,
        server: str,
        username: Optional[str] = None,
        use_keyring: bool = False,
        prompt: Optional[PromptType] = None,
    ) -> None:
        if not server:
            raise ValueError('required flag "server" not set')
        self.server: str = server
        self.username: str = username or getpass.getuser()
        self.password: Optional[str] = None
        self.use_keyring: bool = use_keyring
        self._prompt = prompt

        self.__auth_lock: anyio.Lock = anyio.Lock()

    def __await__(self):
        async def f():
            await self.reauthenticate()
            return self

        return f().__await__()

    @property
    def keyring_service(self) -> str:
        return KEYRING_SERVICE.format(server=self.server)

    async def reauthenticate(self) -> None:
        """Look up the password again, prompting if nothing is stored."""
        async with self.__auth_lock:
            password = os.environ.get(PASSWORD_ENV)
            if self.use_keyring:
                stored = await anyio.to_thread.run_sync(self._keyring_get)
                if stored is not None:
                    password = stored
            if password is None:
                password = await self._ask_password()
            self.password = password

    async def _ask_password(self) -> str:
        if self._prompt is None:
            raise ValueError(
                f"No password available for user {self.username}, "
                f"set {PASSWORD_ENV} or use an interactive terminal"
            )
        password = await anyio.to_thread.run_sync(
            self._prompt, f"Enter {self.username} password"
        )
        if self.use_keyring:
            await anyio.to_thread.run_sync(self.save, password)
        return password

    def _keyring_get(self) -> Optional[str]:
        try:
            password = keyring.get_password(self.keyring_service, self.username)
        except keyring.errors.KeyringError as e:
            logger.warning("Unable to read password from keyring: %s", e)
            return None
        if password is None:
            logger.info("No password found in keyring for user %s", self.username)
        return password

    def save(self, password: Optional[str] = None) -> None:
        """Store the password in the OS keyring."""
        if password is not None:
            self.password = password
        if self.password is None:
            raise ValueError("No password to save")
        keyring.set_password(self.keyring_service, self.username, self.password)
        logger.info("Password saved in keyring for user %s", self.username)

    def forget(self) -> None:
        """Delete the stored password from the OS keyring."""
        try:
            keyring.delete_password(self.keyring_service, self.username)
        except keyring.errors.PasswordDeleteError:
            logger.info("No password found in keyring for user %s", self.username)
            return
        logger.info("Password deleted from keyring for user %s", self.username)
