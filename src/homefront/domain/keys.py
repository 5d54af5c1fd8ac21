"""Key normalisation and the plain-mapping predicate.

Purpose
-------
Turn the heterogeneous key expressions accepted by the public API (a dotted
string, a list of strings, nested lists, or several such arguments) into one
flat list of path segments, and decide which values the converters may descend
into.

Contents
--------
* :data:`SEPARATOR` – the path separator used by every dotted key.
* :func:`normalize_key` – key expression(s) to a list of segments.
* :func:`is_plain_mapping` – ``True`` only for ordinary ``dict`` instances.
* :func:`join_key` – the inverse of :func:`normalize_key` for flat lookups.
"""

from __future__ import annotations

from typing import Any, Final

from .errors import InvalidKeyError

SEPARATOR: Final[str] = "."
"""Separator between path segments in dotted keys and flattened keys."""


def normalize_key(*keys: Any) -> list[str]:
    """Normalise one or more key expressions into a list of path segments.

    Why
    ----
    Callers address nested values with whatever is convenient (``"a.b"``,
    ``["a", "b"]``, ``("a", ["b.c"])``); every path walk needs the same plain
    list of segments.

    What
    ----
    Strings are split on :data:`SEPARATOR`; lists and tuples are normalised
    recursively; the results are concatenated in order. Empty segments are
    kept, so ``"."`` yields two empty strings.

    Parameters
    ----------
    keys:
        A single string, a single list/tuple of key expressions, or several
        such arguments.

    Returns
    -------
    list[str]
        The ordered path segments.

    Raises
    ------
    InvalidKeyError
        When no key is supplied or a leaf is neither a string nor a list/tuple.

    Examples
    --------
    >>> normalize_key("some.stupid.idea")
    ['some', 'stupid', 'idea']
    >>> normalize_key(".")
    ['', '']
    >>> normalize_key("")
    ['']
    >>> normalize_key(["a", ["b.c"]], "d")
    ['a', 'b', 'c', 'd']
    """

    if len(keys) == 1 and isinstance(keys[0], (list, tuple)):
        keys = tuple(keys[0])
    if not keys:
        raise InvalidKeyError("A key needs at least one segment")

    segments: list[str] = []
    for key in keys:
        if isinstance(key, str):
            segments.extend(key.split(SEPARATOR))
        elif isinstance(key, (list, tuple)):
            segments.extend(normalize_key(key))
        else:
            raise InvalidKeyError(f"Key parts must be strings or lists of strings, got {type(key).__name__}: {key!r}")
    return segments


def join_key(key: Any) -> Any:
    """Render a list key as one dotted string; other keys pass through unchanged.

    Examples
    --------
    >>> join_key(["food", "bacon"])
    'food.bacon'
    >>> join_key("water")
    'water'
    """

    if isinstance(key, (list, tuple)):
        return SEPARATOR.join(normalize_key(key))
    return key


def is_plain_mapping(value: Any) -> bool:
    """Return ``True`` when *value* is an ordinary ``dict`` the converters may walk.

    Lists, ``None``, scalars, dict subclasses, mapping proxies and arbitrary
    objects (wrappers included) are leaves.

    Examples
    --------
    >>> is_plain_mapping({}), is_plain_mapping({"foo": "bar"})
    (True, True)
    >>> is_plain_mapping([]), is_plain_mapping(None), is_plain_mapping("foo")
    (False, False, False)
    """

    return type(value) is dict
