"""
Cascade — Dependent Selection Controller

Holds the selected value at every level of a fixed chain and keeps the
selection consistent: changing a level clears every level below it,
regardless of whether the old downstream values would still be valid.

Option lists come from an attached index (HierarchyIndex or
PortAllocationIndex). With no index attached — a fetch still in
flight — every level offers nothing.

@file cascade/controller.py
"""

from typing import Any, Iterable, Sequence

from .exceptions import UnknownLevelError
from .hierarchy import KIND_CHAIN
from .ports import LCP, NAP, PORT

GEO_LEVELS = KIND_CHAIN
PORT_LEVELS = (LCP, NAP, PORT)


class CascadeController:
    """
    Selection state machine for one dependent chain.

    State is one value per level, all ``None`` initially. The controller
    never validates that a value is an actual child of the current
    ancestor; callers populate pickers from ``options_for`` instead.
    """

    def __init__(self, levels: Sequence[str] = GEO_LEVELS, index=None):
        if not levels:
            raise ValueError('A cascade needs at least one level.')
        self.levels = tuple(levels)
        self._values: dict[str, Any] = dict.fromkeys(self.levels)
        self._index = index

    # ------------------------------------------------------------------
    # Index lifecycle
    # ------------------------------------------------------------------

    @property
    def index(self):
        return self._index

    @property
    def is_ready(self) -> bool:
        return self._index is not None

    def attach(self, index) -> None:
        self._index = index

    def detach(self) -> None:
        self._index = None

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def _position(self, level: str) -> int:
        try:
            return self.levels.index(level)
        except ValueError:
            raise UnknownLevelError(level, self.levels) from None

    def set_level(self, level: str, value) -> None:
        pos = self._position(level)
        self._values[level] = value if value != '' else None
        for below in self.levels[pos + 1:]:
            self._values[below] = None

    def clear_level(self, level: str) -> None:
        self.set_level(level, None)

    def value_of(self, level: str):
        self._position(level)
        return self._values[level]

    def values(self) -> dict[str, Any]:
        return dict(self._values)

    def selection(self) -> list[tuple[str, Any]]:
        """Ordered (level, value) pairs for the set prefix of the chain."""
        pairs = []
        for level in self.levels:
            value = self._values[level]
            if value is None:
                break
            pairs.append((level, value))
        return pairs

    def reset(self) -> None:
        self._values = dict.fromkeys(self.levels)

    def restore(self, values: dict[str, Any]) -> None:
        """Prefill from a saved record, top-down, stopping at the first gap."""
        self.reset()
        for level in self.levels:
            value = values.get(level)
            if value in (None, ''):
                break
            self._values[level] = value

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def options_for(self, level: str) -> list:
        pos = self._position(level)
        if self._index is None:
            return []
        if pos == 0:
            return list(self._index.roots(level))
        parent = self._values[self.levels[pos - 1]]
        if parent is None:
            return []
        return list(self._index.children_of(parent, level))

    def all_options(self) -> dict[str, list]:
        return {level: self.options_for(level) for level in self.levels}

    def is_consistent(self) -> bool:
        """True when every set value is among its level's current options."""
        for level, value in self.selection():
            if value not in {option.id for option in self.options_for(level)}:
                return False
        return True

    def apply(self, pairs: Iterable[tuple[str, Any]]) -> None:
        for level, value in pairs:
            self.set_level(level, value)
