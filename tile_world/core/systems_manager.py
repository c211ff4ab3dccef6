"""System registry and tick dispatcher."""

from __future__ import annotations

from typing import Any, Iterable, List
import inspect


class SystemsManager:
    """Maintain an ordered list of systems and tick them sequentially."""

    def __init__(self) -> None:
        self._systems: List[Any] = []

    # ------------------------------------------------------------------
    # Registration API
    # ------------------------------------------------------------------
    def register(self, system: Any) -> None:
        """Add ``system`` to the update list if not already present."""

        if system in self._systems:
            return
        self._systems.append(system)

    def unregister(self, system: Any) -> None:
        """Remove ``system`` if currently registered."""

        if system in self._systems:
            self._systems.remove(system)

    # ------------------------------------------------------------------
    # Tick dispatch
    # ------------------------------------------------------------------
    def update(self, *args: Any) -> None:
        """Call ``update`` on each registered system in order.

        The trailing ``args`` are trimmed to fit each system's ``update``
        signature, so systems may accept ``update()``, ``update(tick)`` or
        ``update(world, tick)``.
        """

        for system in list(self._systems):
            method = getattr(system, "update", None)
            if not callable(method):
                continue

            params = [
                p
                for p in inspect.signature(method).parameters.values()
                if p.kind
                in (
                    inspect.Parameter.POSITIONAL_ONLY,
                    inspect.Parameter.POSITIONAL_OR_KEYWORD,
                )
            ]
            n = len(params)
            if n == 0:
                method()
            else:
                method(*args[-n:])

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterable[Any]:
        return iter(self._systems)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._systems)


__all__ = ["SystemsManager"]
