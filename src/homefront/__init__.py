"""Public package surface for ``homefront``.

Wraps a plain ``dict`` in either nested or flat (dot-joined keys) form and
offers dotted-path fetch/put/remove/search plus mode-aware deep merges. The
converters and the merge collaborator are exported as plain functions so they
can be used without the wrapper.
"""

from __future__ import annotations

from .application.merge import deep_merge, merge_into
from .container import MODE_FLAT, MODE_NESTED, Homefront, Mode
from .domain.convert import expand, flatten
from .domain.errors import HomefrontError, InvalidKeyError, InvalidModeError, PathConflictError
from .domain.keys import SEPARATOR, is_plain_mapping, normalize_key
from .observability import bind_trace_id, get_logger

__all__ = [
    "Homefront",
    "Mode",
    "MODE_FLAT",
    "MODE_NESTED",
    "SEPARATOR",
    "flatten",
    "expand",
    "normalize_key",
    "is_plain_mapping",
    "merge_into",
    "deep_merge",
    "HomefrontError",
    "InvalidModeError",
    "InvalidKeyError",
    "PathConflictError",
    "bind_trace_id",
    "get_logger",
]
