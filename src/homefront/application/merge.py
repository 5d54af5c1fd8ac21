"""Application-layer deep-merge policy.

Purpose
-------
Overlay any number of mappings onto a target, left to right, so later sources
win conflicting keys while sub-mappings merge key by key. This is the merge
collaborator used by :class:`homefront.container.Homefront`; it is free of any
mode handling so it can be swapped for another implementation of the
:class:`homefront.application.ports.Merger` port.

Contents
    - ``merge_into``: public entry point that mutates and returns a target.
    - ``deep_merge``: stateless variant starting from a fresh ``dict``.
    - ``_merge_mapping`` / ``_merge_branch`` / ``_set_scalar``: recursive
      stanzas that keep the precedence logic readable.

Precedence rules
----------------
* Plain ``dict`` values merge recursively into a plain ``dict`` already stored
  at the same key. Other mappings (dict subclasses, mapping proxies) are
  leaves, matching :func:`homefront.domain.keys.is_plain_mapping`.
* Every other value (lists included) replaces what was there wholesale; lists
  are never concatenated.
* Incoming values are deep-copied, so the target never aliases a source.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from copy import deepcopy
from types import MappingProxyType
from typing import Any

from ..domain.keys import is_plain_mapping


def merge_into(target: MutableMapping[str, Any], *sources: Mapping[str, Any] | None) -> MutableMapping[str, Any]:
    """Merge *sources* into *target* in place and return *target*.

    Why
    ----
    The wrapper keeps one dictionary for its whole lifetime; merging must
    therefore mutate it instead of producing a replacement.

    Parameters
    ----------
    target:
        Mapping receiving the merged content. Nested mappings already stored in
        it are updated in place.
    sources:
        Mappings ordered from lowest to highest precedence. ``None`` or empty
        sources are skipped.

    Returns
    -------
    MutableMapping[str, Any]
        The very same *target* object.

    Examples
    --------
    >>> base = {"cake": {"walk": 1}, "foo": "bar"}
    >>> merged = merge_into(base, {"foo": "bat", "cake": {"tastes": "good"}})
    >>> merged is base
    True
    >>> base
    {'cake': {'walk': 1, 'tastes': 'good'}, 'foo': 'bat'}
    """

    for source in sources:
        if not source:
            continue
        _merge_mapping(target, source)
    return target


def deep_merge(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a fresh ``dict`` holding *sources* merged left to right.

    Examples
    --------
    >>> deep_merge({"a": 1, "b": {"x": 1}}, {"a": 2, "b": {"y": 2}})
    {'a': 2, 'b': {'x': 1, 'y': 2}}
    >>> deep_merge({"tags": [1, 2]}, {"tags": [3]})
    {'tags': [3]}
    """

    merged: dict[str, Any] = {}
    merge_into(merged, *sources)
    return merged


def _merge_mapping(target: MutableMapping[str, Any], incoming: Mapping[str, Any]) -> None:
    """Recursively merge ``incoming`` into ``target``."""

    for key, value in incoming.items():
        if is_plain_mapping(value):
            _merge_branch(target, key, value)
        else:
            _set_scalar(target, key, value)


def _merge_branch(target: MutableMapping[str, Any], key: str, value: Mapping[str, Any]) -> None:
    """Merge mapping ``value`` into ``target[key]`` and recurse."""

    existing = target.get(key)
    if is_plain_mapping(existing):
        _merge_mapping(existing, value)
        return

    container: dict[str, Any] = {}
    _merge_mapping(container, value)
    target[key] = container


def _set_scalar(target: MutableMapping[str, Any], key: str, value: Any) -> None:
    target[key] = _copy_leaf(value)


def _copy_leaf(value: Any) -> Any:
    """Deep-copy *value*; ``copy.deepcopy`` cannot handle ``mappingproxy`` objects."""

    if isinstance(value, MappingProxyType):
        return MappingProxyType(deepcopy(dict(value)))
    return deepcopy(value)
