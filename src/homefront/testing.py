"""Testing support that keeps the merge collaborator substitutable.

Purpose
    Provide a deliberately small reference implementation of the
    :class:`homefront.application.ports.Merger` port so test suites can swap
    the default collaborator out and cross-check it.

Contents
    - ``reference_merge_into``: naive recursive overlay, no copying tricks.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping

from .domain.keys import is_plain_mapping


def reference_merge_into(
    target: MutableMapping[str, Any], *sources: Mapping[str, Any] | None
) -> MutableMapping[str, Any]:
    """Overlay *sources* onto *target* with the plainest possible rules.

    What
        Plain dicts merge key by key; every other value replaces the previous one.
        Values are stored by reference, which is good enough for assertions.
    Outputs
        The mutated *target*.

    Examples
    --------
    >>> reference_merge_into({"a": {"x": 1}}, None, {"a": {"y": 2}, "b": [1]})
    {'a': {'x': 1, 'y': 2}, 'b': [1]}
    """

    for source in sources:
        for key, value in (source or {}).items():
            if is_plain_mapping(value) and is_plain_mapping(target.get(key)):
                reference_merge_into(target[key], value)
            elif is_plain_mapping(value):
                target[key] = reference_merge_into({}, value)
            else:
                target[key] = value
    return target
