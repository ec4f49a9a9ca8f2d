# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
"""Utilities for working with kubeconfig data structures."""
from __future__ import annotations


def list_dict_unpack(
    input_list: list[dict], key: str = "key", value: str = "value"
) -> dict:
    """Convert a list of dictionaries to a single dictionary.

    Later entries win when the same key appears more than once.

    Args:
        input_list: The list of dictionaries to convert to a single dictionary.
        key: The key to use for the new dictionary's keys. Defaults to "key".
        value: The key to use for the new dictionary's values. Defaults to "value".

    Returns:
        A dictionary with the keys and values from the input list.
    """
    return {i[key]: i[value] for i in input_list}


def dict_list_pack(
    input_dict: dict, key: str = "key", value: str = "value"
) -> list[dict]:
    """Convert a dictionary to a list of dictionaries.

    Args:
        input_dict: The dictionary to convert to a list of dictionaries.
        key: The key to use for the input dictionary's keys. Defaults to "key".
        value: The key to use for the input dictionary's values. Defaults to "value".

    Returns:
        A list of dictionaries with the keys and values from the input dictionary.
    """
    return [{key: k, value: v} for k, v in input_dict.items()]


def merge_named_lists(
    existing: list[dict], new: list[dict], value: str
) -> list[dict]:
    """Merge two kubeconfig sections, entries from ``new`` replacing same-named ones."""
    merged = list_dict_unpack(existing, "name", value)
    merged.update(list_dict_unpack(new, "name", value))
    return dict_list_pack(merged, "name", value)
