# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License

from typing import Optional

import httpx


class KarbonError(Exception):
    """Base class for errors raised by karbon."""


class AuthenticationError(KarbonError):
    """The Karbon API rejected the client credentials."""


class NotFoundError(KarbonError):
    """Unable to find the requested Karbon cluster."""


class APITimeoutError(KarbonError):
    """A timeout has occurred while waiting for a response from the Karbon API."""


class SSHAgentError(KarbonError):
    """Unable to talk to the SSH agent or to hand it a usable key."""


class ServerError(KarbonError):
    """Unexpected response from the Karbon API.

    Attributes:
        status: The HTTP status code returned by the server
        response: The httpx response object
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        response: Optional[httpx.Response] = None,
    ) -> None:
        self.status = status
        self.response = response
        super().__init__(message)


class APIConnectionError(KarbonError):
    """Unable to reach the Karbon API server."""
