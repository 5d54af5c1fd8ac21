"""The :class:`Homefront` wrapper around one flat or nested ``dict``.

Purpose
-------
Hold a single mapping plus a mode flag and route every read, write, merge, and
search through the right primitives: direct key access in flat mode, dotted
path walks in nested mode.

Contents
--------
* :class:`Mode` – ``"flat"`` / ``"nested"`` enumeration.
* :class:`Homefront` – the wrapper; ``merge`` works both on instances (in place,
  mode aware) and on the class (stateless, returns a fresh ``dict``).

Known sharp edge
----------------
In nested mode :meth:`Homefront.fetch` first looks the key up verbatim at the
top level. A literal key such as ``"a.b"`` therefore shadows the path
``a -> b`` whenever both exist. The shortcut is intentional.

Aliasing
--------
Reads never copy: :meth:`Homefront.fetch` returns stored sub-mappings by
reference and :meth:`Homefront.get_data` returns the held ``dict`` itself.
Merges deep-copy incoming sources.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, MutableMapping
from enum import Enum
from functools import update_wrapper
from typing import Any, Callable, Final, Iterable

from .application.merge import deep_merge, merge_into
from .application.ports import Merger
from .domain.convert import expand as _expand
from .domain.convert import flatten as _flatten
from .domain.errors import InvalidModeError, PathConflictError
from .domain.keys import SEPARATOR, join_key, normalize_key
from .observability import log_debug, log_error, log_info, make_event


class Mode(str, Enum):
    """Representation of the wrapped mapping."""

    FLAT = "flat"
    NESTED = "nested"


MODE_FLAT: Final[Mode] = Mode.FLAT
MODE_NESTED: Final[Mode] = Mode.NESTED


class _hybridmethod:
    """Bind one function on instances and another on the owning class."""

    def __init__(self, instance_func: Callable[..., Any]) -> None:
        self._instance_func = instance_func
        self._class_func: Callable[..., Any] | None = None
        update_wrapper(self, instance_func)

    def classlevel(self, class_func: Callable[..., Any]) -> _hybridmethod:
        self._class_func = class_func
        return self

    def __get__(self, instance: Any, owner: type) -> Callable[..., Any]:
        if instance is None:
            if self._class_func is None:
                raise TypeError(f"{self.__name__}() has no class-level variant")
            return self._class_func.__get__(owner, owner)
        return self._instance_func.__get__(instance, owner)


class Homefront:
    """Wrap a ``dict`` and address its values by dotted keys.

    Why
    ----
    Configuration-like data travels both as trees and as single-level
    ``"a.b.c"`` dictionaries. The wrapper lets callers work with either shape
    through one API and merge sources of mixed shape safely.

    Parameters
    ----------
    data:
        Mapping to wrap; defaults to a new empty ``dict``. It is kept by
        reference and mutated in place.
    mode:
        ``"flat"`` or ``"nested"`` (default). Must match the shape of *data*.
    merger:
        Deep-merge collaborator satisfying :class:`~homefront.application.ports.Merger`.
        Defaults to :func:`~homefront.application.merge.merge_into`.

    Examples
    --------
    >>> front = Homefront({"food": {"bacon": {"taste": "good"}}})
    >>> front.fetch("food.bacon.taste")
    'good'
    >>> front.put("food.bacon.smell", "great").flatten()
    {'food.bacon.taste': 'good', 'food.bacon.smell': 'great'}
    >>> Homefront.merge({"a": 1, "b": {"x": 1}}, {"a": 2, "b": {"y": 2}})
    {'a': 2, 'b': {'x': 1, 'y': 2}}
    """

    MODE_FLAT: Final[Mode] = Mode.FLAT
    MODE_NESTED: Final[Mode] = Mode.NESTED

    def __init__(
        self,
        data: MutableMapping[str, Any] | None = None,
        mode: Mode | str | None = None,
        *,
        merger: Merger | None = None,
    ) -> None:
        self._data: MutableMapping[str, Any] = {} if data is None else data
        self._merger: Merger = merger or merge_into
        self._mode = Mode.NESTED
        self.set_mode(mode)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r}, mode={self._mode.value!r})"

    @property
    def data(self) -> MutableMapping[str, Any]:
        return self._data

    @property
    def mode(self) -> Mode:
        return self._mode

    def set_mode(self, mode: Mode | str | None = None) -> Homefront:
        """Set the mode, defaulting to nested.

        Raises
        ------
        InvalidModeError
            For anything other than ``"flat"`` or ``"nested"``. The current
            mode is left untouched.
        """

        try:
            resolved = Mode(mode or Mode.NESTED)
        except (ValueError, TypeError):
            allowed = '" or "'.join(member.value for member in Mode)
            log_error("mode_rejected", **make_event("set_mode", None, {"mode": repr(mode)}))
            raise InvalidModeError(f'Invalid mode supplied. Must be one of "{allowed}", got {mode!r}') from None

        self._mode = resolved
        log_debug("mode_changed", **make_event("set_mode", None, {"mode": resolved.value}))
        return self

    def get_mode(self) -> Mode:
        return self._mode

    def get_data(self) -> MutableMapping[str, Any]:
        return self._data

    def is_mode_flat(self) -> bool:
        return self._mode is Mode.FLAT

    def is_mode_nested(self) -> bool:
        return self._mode is Mode.NESTED

    def expand(self) -> MutableMapping[str, Any]:
        """Return the data in nested form (the held ``dict`` itself when already nested)."""

        return self._data if self.is_mode_nested() else _expand(self._data)

    def flatten(self) -> MutableMapping[str, Any]:
        """Return the data in flat form (the held ``dict`` itself when already flat)."""

        return self._data if self.is_mode_flat() else _flatten(self._data)

    @_hybridmethod
    def merge(self, *sources: Any) -> Homefront:
        """Deep-merge *sources* into the held data, left to right.

        Why
        ----
        Sources often arrive in the other representation (flat overrides for
        nested data or vice versa); each one is converted to this instance's
        mode before the merge so the result stays consistent.

        Parameters
        ----------
        sources:
            Mappings or :class:`Homefront` instances, given variadically or as
            a single list. Falsy entries are skipped.

        Returns
        -------
        Homefront
            ``self``, for chaining.

        Notes
        -----
        Called on the class instead (``Homefront.merge(a, b)``) the method is
        stateless: it merges onto a fresh ``dict`` without mode conversion and
        returns that ``dict``.

        Examples
        --------
        >>> front = Homefront({"bat": {"cake": "lie"}})
        >>> front.merge({"bat.space": "exploration"}, None).get_data()
        {'bat': {'cake': 'lie', 'space': 'exploration'}}
        """

        convert = _flatten if self.is_mode_flat() else _expand
        normalized = [convert(source) for source in _collect_sources(sources)]
        self._merger(self._data, *normalized)
        log_info("sources_merged", **make_event("merge", None, {"sources": len(normalized), "mode": self._mode.value}))
        return self

    @merge.classlevel
    def merge(cls, *sources: Any) -> dict[str, Any]:
        return deep_merge(*_collect_sources(sources))

    def apply_defaults(self, key: Any, defaults: Mapping[str, Any]) -> Homefront:
        """Fill the gaps below *key* with *defaults*; existing values win.

        In flat mode the defaults are flattened under *key* and only the
        dotted entries that are still missing get written.

        Examples
        --------
        >>> front = Homefront({"foo": {"bar": {"bat": "value"}}})
        >>> front.apply_defaults("foo.bar", {"bat": "never applied", "cake": "lies"}).fetch("foo.bar")
        {'bat': 'value', 'cake': 'lies'}
        >>> flat = Homefront({"foo.bar.bat": "value"}, "flat")
        >>> flat.apply_defaults("foo.bar", {"bat": "never applied", "cake": "lies"}).get_data()
        {'foo.bar.bat': 'value', 'foo.bar.cake': 'lies'}
        """

        if self.is_mode_flat():
            prefix = join_key(key)
            scoped = {f"{prefix}{SEPARATOR}{path}": value for path, value in _flatten(defaults).items()}
            self._merger(self._data, {path: value for path, value in scoped.items() if path not in self._data})
            return self

        current = self.fetch(key, {})
        return self.put(key, type(self).merge(defaults, current))

    def fetch_or_put(self, key: Any, to_put: Any) -> Any:
        """Return the value at *key*, storing *to_put* first when it is missing.

        A stored ``None`` counts as missing and is overwritten.
        """

        value = self.fetch(key)
        if value is None:
            self.put(key, to_put)
            return to_put
        return value

    def fetch(self, key: Any, default: Any = None) -> Any:
        """Return the value stored at *key*, or *default* when it cannot be resolved.

        Parameters
        ----------
        key:
            Dotted string or list of segments. In flat mode the key is one
            opaque string (lists are joined with dots).
        default:
            Returned when the key or any of its parents is missing, or when a
            parent is not a mapping. A stored ``None`` is returned as ``None``.

        Examples
        --------
        >>> Homefront({"food": None}).fetch("food.bacon", "default")
        'default'
        >>> Homefront({"food.bacon": "crispy"}, Homefront.MODE_FLAT).fetch("food")
        """

        if isinstance(key, str) and key in self._data:
            return self._data[key]
        if self.is_mode_flat():
            return self._data.get(join_key(key), default)

        *parents, last = normalize_key(key)
        cursor: Any = self._data
        for segment in parents:
            if not isinstance(cursor, Mapping) or segment not in cursor:
                return default
            cursor = cursor[segment]
        if not isinstance(cursor, Mapping) or last not in cursor:
            return default
        return cursor[last]

    def put(self, key: Any, value: Any) -> Homefront:
        """Store *value* at *key*, creating missing parents in nested mode.

        Raises
        ------
        PathConflictError
            When an existing parent along the path is not a mapping.
        """

        if self._is_direct_key(key):
            self._data[join_key(key)] = value
            return self

        *parents, last = normalize_key(key)
        cursor = self._data
        for segment in parents:
            if segment not in cursor:
                cursor[segment] = {}
            child = cursor[segment]
            if not isinstance(child, MutableMapping):
                log_debug("path_conflict", **make_event("put", key, {"segment": segment}))
                raise PathConflictError(key, segment, type(child).__name__)
            cursor = child
        cursor[last] = value
        return self

    def remove(self, key: Any) -> Homefront:
        """Delete the value at *key*; absent keys and parents are ignored."""

        if self._is_direct_key(key):
            self._data.pop(join_key(key), None)
            return self

        *parents, last = normalize_key(key)
        parent = self.fetch(parents) if parents else self._data
        if isinstance(parent, MutableMapping):
            parent.pop(last, None)
        return self

    def search(self, phrase: str | int | float | re.Pattern[str]) -> list[dict[str, Any]]:
        """Return ``{"key", "value"}`` entries whose rendered value matches *phrase*.

        Why
        ----
        Lets tooling locate settings by content without knowing their path.

        What
        ----
        Works on the flat form. Lists are rendered as compact JSON, every other
        value with :func:`str`. A compiled pattern is applied with
        :meth:`re.Pattern.search`; anything else is matched as a substring.

        Examples
        --------
        >>> front = Homefront({"food.bacon.taste": "good", "water": "meh"}, "flat")
        >>> front.search("o")
        [{'key': 'food.bacon.taste', 'value': 'good'}]
        """

        return [
            {"key": key, "value": value}
            for key, value in self.flatten().items()
            if _matches(phrase, _render(value))
        ]

    def _is_direct_key(self, key: Any) -> bool:
        """Return ``True`` when *key* addresses a top-level entry without a path walk."""

        return self.is_mode_flat() or (isinstance(key, str) and SEPARATOR not in key)


def _collect_sources(sources: tuple[Any, ...]) -> Iterable[Mapping[str, Any]]:
    """Unpack a single list argument, unwrap wrappers, and drop falsy sources."""

    if len(sources) == 1 and isinstance(sources[0], (list, tuple)):
        sources = tuple(sources[0])
    for source in sources:
        if not source:
            continue
        yield source.get_data() if isinstance(source, Homefront) else source


def _render(value: Any) -> str:
    if isinstance(value, list):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


def _matches(phrase: Any, text: str) -> bool:
    if isinstance(phrase, re.Pattern):
        return phrase.search(text) is not None
    return str(phrase) in text
