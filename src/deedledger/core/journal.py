"""
Write journal for all-or-nothing ledger operations.

Every store write goes through a Journal, which performs the write and
records how to undo it. A failed operation replays the undo entries in
reverse order; a successful one drops them. Each entry is O(1), so no
structure is ever copied to make an operation atomic.
"""

from __future__ import annotations

from typing import Any, Callable, MutableMapping

_MISSING = object()


class Journal:
    """Undo log scoped to a single ledger operation."""

    def __init__(self) -> None:
        self._undo: list[Callable[[], None]] = []

    def __len__(self) -> int:
        return len(self._undo)

    def set_item(self, mapping: MutableMapping, key: Any, value: Any) -> None:
        previous = mapping.get(key, _MISSING)
        mapping[key] = value
        self._undo.append(lambda: _restore_item(mapping, key, previous))

    def del_item(self, mapping: MutableMapping, key: Any) -> None:
        previous = mapping.pop(key)
        self._undo.append(lambda: mapping.__setitem__(key, previous))

    def append(self, items: list, value: Any) -> None:
        items.append(value)
        self._undo.append(items.pop)

    def set_index(self, items: list, index: int, value: Any) -> None:
        previous = items[index]
        items[index] = value
        self._undo.append(lambda: items.__setitem__(index, previous))

    def pop(self, items: list) -> Any:
        value = items.pop()
        self._undo.append(lambda: items.append(value))
        return value

    def set_attr(self, obj: Any, name: str, value: Any) -> None:
        previous = getattr(obj, name)
        setattr(obj, name, value)
        self._undo.append(lambda: setattr(obj, name, previous))

    def commit(self) -> None:
        self._undo.clear()

    def rollback(self) -> int:
        """Undo every recorded write, newest first. Returns the number undone."""
        undone = len(self._undo)
        while self._undo:
            self._undo.pop()()
        return undone


def _restore_item(mapping: MutableMapping, key: Any, previous: Any) -> None:
    if previous is _MISSING:
        mapping.pop(key, None)
    else:
        mapping[key] = previous
