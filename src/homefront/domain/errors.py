"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy raised by the key normaliser, the converters, and
the :class:`~homefront.container.Homefront` wrapper. The hierarchy lives in the
domain layer so every other layer may depend on it without creating cycles.

Contents
--------
* :class:`HomefrontError` – umbrella base class for all library failures.
* :class:`InvalidModeError` – a mode other than ``"flat"``/``"nested"`` was
  supplied.
* :class:`InvalidKeyError` – a key expression is neither a string nor a list
  of key expressions.
* :class:`PathConflictError` – a non-mapping value sits where a path needs an
  intermediate mapping.

System Role
-----------
Absent keys and absent parents are never errors (they resolve to defaults or
no-ops). Only malformed input and inconsistent shapes surface here, so callers
catching :class:`HomefrontError` see every failure the library can produce.
"""

from __future__ import annotations


class HomefrontError(Exception):
    """Base type for all exceptions emitted by ``homefront``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidModeError(HomefrontError, ValueError):
    """Raised when a mode outside ``{"flat", "nested"}`` is requested.

    Why
    ----
    The mode decides how every key is interpreted; accepting a typo would
    silently switch behaviour. The message lists the allowed values.
    """


class InvalidKeyError(HomefrontError, TypeError):
    """Raised when a key expression cannot be normalised into path segments."""


class PathConflictError(HomefrontError):
    """Raised when a path walk meets a value that cannot hold children.

    Attributes
    ----------
    key:
        The key expression as supplied by the caller.
    segment:
        Path segment whose current value blocked the walk.
    found:
        Type name of the blocking value.

    Examples
    --------
    >>> err = PathConflictError("a.b", "a", "int")
    >>> str(err)
    "Cannot descend into 'a' while resolving 'a.b': found int, expected a mapping"
    >>> err.segment
    'a'
    """

    def __init__(self, key: object, segment: str, found: str) -> None:
        super().__init__(f"Cannot descend into {segment!r} while resolving {key!r}: found {found}, expected a mapping")
        self.key = key
        self.segment = segment
        self.found = found
