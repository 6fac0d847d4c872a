"""
Identity-keyed multi-selection that survives pagination and sorting.

The selection stores record identities only, never record objects, so a
reload can replace every record without leaving stale references behind.
It is cleared only on explicit request; after each reload the owner calls
`reconcile` so identities of records that no longer exist are dropped.
"""

from typing import Iterable

from record_console.models.records import Identity


class SelectionManager:
    """Set of selected record identities."""

    def __init__(self, identities: Iterable[Identity] | None = None) -> None:
        self._selected: dict[Identity, None] = dict.fromkeys(identities or ())

    @property
    def selected(self) -> frozenset[Identity]:
        """Snapshot of the selected identities."""
        return frozenset(self._selected)

    @property
    def count(self) -> int:
        return len(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, identity: object) -> bool:
        return identity in self._selected

    def ordered(self) -> list[Identity]:
        """Selected identities in the order they were selected."""
        return list(self._selected)

    def is_selected(self, identity: Identity) -> bool:
        return identity in self._selected

    def toggle_row(self, identity: Identity, checked: bool) -> None:
        """Add or remove a single identity."""
        if identity is None:
            return
        if checked:
            self._selected.setdefault(identity, None)
        else:
            self._selected.pop(identity, None)

    def toggle_visible(self, checked: bool, visible_identities: Iterable[Identity]) -> None:
        """
        Select or deselect the visible page.

        Checking adds every visible identity; unchecking removes exactly the
        visible identities and leaves selections from other pages alone.

        Args:
            checked: New state of the "select page" checkbox.
            visible_identities: Identities of the records on the current page.
        """
        for identity in visible_identities:
            self.toggle_row(identity, checked)

    def all_selected(self, identities: Iterable[Identity]) -> bool:
        """True when every given identity is selected (and there is at least one)."""
        identities = list(identities)
        return bool(identities) and all(i in self._selected for i in identities)

    def clear(self) -> None:
        self._selected.clear()

    def reconcile(self, current_identities: Iterable[Identity]) -> set[Identity]:
        """
        Intersect the selection with the identities that still exist.

        Args:
            current_identities: Identities of the freshly loaded collection.

        Returns:
            The identities that were dropped.
        """
        current = set(current_identities)
        dropped = {identity for identity in self._selected if identity not in current}
        for identity in dropped:
            del self._selected[identity]
        return dropped
