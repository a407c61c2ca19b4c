"""Shared snapshot support for in-memory repositories."""

from typing import Any


class InMemoryStore:
    """Base for in-memory repositories that can roll back.

    Entities are immutable, so a shallow copy of each backing dict is a
    complete snapshot. Subclasses list their backing attributes in
    ``_state_attrs``.
    """

    _state_attrs: tuple[str, ...] = ()

    def snapshot(self) -> dict[str, Any]:
        """Capture the current contents."""
        return {name: dict(getattr(self, name)) for name in self._state_attrs}

    def restore(self, snapshot: dict[str, Any]) -> None:
        """Put back contents captured by ``snapshot``."""
        for name, value in snapshot.items():
            setattr(self, name, dict(value))
