"""Conversion between nested and flat (dot-joined) mappings.

Purpose
-------
Provide the two pure transforms every other part of the package relies on:
:func:`flatten` walks a nested ``dict`` and emits one entry per leaf under its
dotted path, and :func:`expand` rebuilds the tree from such dotted keys.

Rules shared by both directions
-------------------------------
* Only plain ``dict`` values are walked (see
  :func:`homefront.domain.keys.is_plain_mapping`); lists are leaves and are
  never decomposed into indexed keys.
* Empty sub-mappings vanish on flatten and therefore cannot be restored.
* Keys that contain the separator are ambiguous once flattened; round trips
  are only faithful for keys without dots.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..observability import log_debug, make_event
from .errors import PathConflictError
from .keys import SEPARATOR, is_plain_mapping


def flatten(source: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten *source* into a single-level ``dict`` with dotted keys.

    Why
    ----
    The flat form addresses every leaf with one string, which makes it a
    convenient exchange and search format.

    Returns
    -------
    dict[str, Any]
        New mapping, exactly one level deep. Leaf values are shared with
        *source*, not copied.

    Examples
    --------
    >>> flatten({"food": {"bacon": {"taste": "good"}}, "water": "meh"})
    {'food.bacon.taste': 'good', 'water': 'meh'}
    >>> flatten({"a": [1, 2], "b": {}})
    {'a': [1, 2]}
    """

    target: dict[str, Any] = {}
    _flatten_into(target, source, None)
    return target


def _flatten_into(target: dict[str, Any], source: Mapping[str, Any], base_path: str | None) -> None:
    for key, value in source.items():
        path = key if base_path is None else f"{base_path}{SEPARATOR}{key}"
        if is_plain_mapping(value):
            _flatten_into(target, value, path)
        else:
            target[path] = value


def expand(source: Mapping[str, Any], overwrite_parent: bool = False) -> dict[str, Any]:
    """Expand dotted keys of *source* into a nested ``dict``.

    Why
    ----
    Flat input (merge sources, serialised data) must be brought back into tree
    form before it can be overlaid onto nested data.

    What
    ----
    Every key is split on :data:`SEPARATOR`; intermediate mappings are created
    as needed and the value is assigned at the final segment. Values that are
    plain mappings are expanded as well and combined with a mapping already
    present at the same slot. Keys are processed in insertion order, so later
    keys win conflicting branches.

    Parameters
    ----------
    source:
        Flat, nested, or mixed mapping.
    overwrite_parent:
        When ``True`` a non-mapping value met at an intermediate position is
        discarded in favour of a fresh mapping (``{"a": 1, "a.b": 2}`` becomes
        ``{"a": {"b": 2}}``). When ``False`` that situation raises.

    Returns
    -------
    dict[str, Any]
        New nested mapping. Already-nested input comes back with identical
        structure.

    Raises
    ------
    PathConflictError
        When *overwrite_parent* is ``False`` and an intermediate position holds
        a non-mapping value.

    Examples
    --------
    >>> expand({"food.bacon.taste": "good", "water": "meh"})
    {'food': {'bacon': {'taste': 'good'}}, 'water': 'meh'}
    >>> expand({"a": 1, "a.b": 2}, overwrite_parent=True)
    {'a': {'b': 2}}
    """

    target: dict[str, Any] = {}
    for key, value in source.items():
        _assign(target, key, value, overwrite_parent)
    return target


def _assign(target: dict[str, Any], key: str, value: Any, overwrite_parent: bool) -> None:
    """Place *value* under dotted *key* inside *target*, creating parents."""

    segments = key.split(SEPARATOR) if isinstance(key, str) else [key]
    cursor = target
    for segment in segments[:-1]:
        cursor = _child_mapping(cursor, segment, key, overwrite_parent)

    last = segments[-1]
    if is_plain_mapping(value):
        nested = expand(value, overwrite_parent)
        existing = cursor.get(last)
        if is_plain_mapping(existing):
            for child_key, child_value in nested.items():
                _assign(existing, child_key, child_value, overwrite_parent)
            return
        cursor[last] = nested
        return
    cursor[last] = value


def _child_mapping(cursor: dict[str, Any], segment: str, key: str, overwrite_parent: bool) -> dict[str, Any]:
    """Return the mapping stored at ``cursor[segment]``, creating it when absent."""

    if segment not in cursor:
        cursor[segment] = {}
        return cursor[segment]

    child = cursor[segment]
    if is_plain_mapping(child):
        return child
    if not overwrite_parent:
        log_debug("path_conflict", **make_event("expand", key, {"segment": segment}))
        raise PathConflictError(key, segment, type(child).__name__)

    log_debug("parent_overwritten", **make_event("expand", key, {"segment": segment, "discarded": type(child).__name__}))
    cursor[segment] = {}
    return cursor[segment]
