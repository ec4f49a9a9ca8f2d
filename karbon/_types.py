# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
from os import PathLike
from typing import Callable, Union

PathType = Union[
    str,
    "PathLike[str]",
]

# Called with a message, returns the password typed by the user.
PromptType = Callable[[str], str]
