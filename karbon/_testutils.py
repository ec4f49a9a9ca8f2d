# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import contextlib
import os
from typing import Generator, Optional


@contextlib.contextmanager
def set_env(**environ: Optional[str]) -> Generator[None, None, None]:
    """Temporarily sets the process environment variables.

    A value of ``None`` removes the variable for the duration of the scope.

    Args:
        **environ: Keyword arguments representing the environment variables to set.

    Examples:
        >>> with set_env(KARBON_PASSWORD='nutanix/4u'):
        ...     "KARBON_PASSWORD" in os.environ
        True

        >>> "KARBON_PASSWORD" in os.environ
        False

    """
    old_environ = dict(os.environ)
    for key, value in environ.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
    try:
        yield
    finally:
        os.environ.clear()
        os.environ.update(old_environ)
