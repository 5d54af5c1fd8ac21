"""Application-layer port describing the deep-merge collaborator.

Purpose
-------
Define the structural contract a merge implementation must satisfy so
:class:`homefront.container.Homefront` can delegate overlaying without
depending on a concrete implementation.

Contents
--------
* :class:`Merger` – mutates a target mapping with sources merged left to right.

System Role
-----------
:func:`homefront.application.merge.merge_into` is the default implementation.
Tests substitute :func:`homefront.testing.reference_merge_into` to prove the
wrapper only relies on the contract below.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Protocol, runtime_checkable


@runtime_checkable
class Merger(Protocol):
    """Overlay sources onto a target mapping, later sources winning.

    Why
    ----
    Keep the merge strategy replaceable without touching the mode-aware
    normalisation done by the wrapper.

    Contract
    --------
    * ``None``/empty sources are skipped.
    * Mapping values merge recursively; all other values (lists included)
      replace the previous value wholesale.
    * *target* is mutated in place and returned.
    """

    def __call__(
        self, target: MutableMapping[str, Any], *sources: Mapping[str, Any] | None
    ) -> MutableMapping[str, Any]:
        """Merge *sources* into *target* left to right and return *target*."""
