"""
Per-screen list engine.

A ListView is instantiated once per mounted screen. It owns the screen's
QueryDescriptor, its SelectionManager and the latest record collection, and
re-runs the pipeline synchronously whenever the records or the query change.
The page index is clamped after every recompute so the current page always
exists while there are results.

Reloads are sequenced: `begin_reload` hands out increasing tokens and
`apply_reload` ignores a response whose token is older than the newest one
issued, so the last *requested* reload wins rather than the last to arrive.
"""

import copy
from typing import Any, Iterable, Mapping, Sequence

from record_console.engine.pipeline import PipelineResult, distinct_values, run_pipeline
from record_console.engine.selection import SelectionManager
from record_console.lib import logs
from record_console.models.query import QueryDescriptor
from record_console.models.records import Identity, ListConfig, Record

LOG = logs.logger(__file__)


class ListView:
    """
    Query, selection and pipeline state of one list screen.

    Args:
        config: Field configuration of the record type.
        query: Initial query state (a fresh descriptor when omitted).
        records: Initial record collection.
        selected: Initially selected identities.
    """

    def __init__(
        self,
        config: ListConfig,
        query: QueryDescriptor | None = None,
        records: Iterable[Record] = (),
        selected: Iterable[Identity] = (),
    ) -> None:
        self.config = config
        self.query = query or QueryDescriptor()
        self.selection = SelectionManager(selected)
        self._records: list[Record] = copy.deepcopy(list(records))
        self._version = 0
        self._reload_token = 0
        self._cache_key: tuple[int, str] | None = None
        self._result = PipelineResult()
        self._recompute()

    # -- records -----------------------------------------------------------

    @property
    def records(self) -> list[Record]:
        """Copy of the current record collection."""
        return list(self._records)

    def set_records(self, records: Iterable[Record]) -> None:
        """
        Replace the record collection and reconcile the selection.

        Records are deep-copied so later changes by the caller cannot leak
        into the engine.
        """
        self._records = copy.deepcopy(list(records))
        self._version += 1
        dropped = self.selection.reconcile(self.config.identities(self._records))
        if dropped:
            LOG.info("Dropped %s stale selection(s) after reload", len(dropped))
        self._recompute()

    def begin_reload(self) -> int:
        """Issue a token for a reload that is about to be requested."""
        self._reload_token += 1
        return self._reload_token

    def is_stale(self, token: int) -> bool:
        """True when a newer reload than `token` has been issued."""
        return token < self._reload_token

    def apply_reload(self, token: int, records: Iterable[Record]) -> bool:
        """
        Apply a reload response unless a newer reload has been issued.

        Returns:
            True if the records were applied, False if the response was stale.
        """
        if self.is_stale(token):
            LOG.debug(
                "Ignoring stale reload - token:%s latest:%s", token, self._reload_token
            )
            return False
        self.set_records(records)
        return True

    # -- pipeline ----------------------------------------------------------

    @property
    def result(self) -> PipelineResult:
        return self._result

    @property
    def page_data(self) -> list[Record]:
        return self._result.page_data

    @property
    def total(self) -> int:
        return self._result.total

    @property
    def all_filtered_and_sorted(self) -> list[Record]:
        return self._result.all_filtered_and_sorted

    @property
    def visible_identities(self) -> list[Identity]:
        return self.config.identities(self._result.page_data)

    def _recompute(self) -> None:
        cache_key = (self._version, self.query.fingerprint())
        if cache_key == self._cache_key:
            return
        result = run_pipeline(self._records, self.query, self.config)
        if self.query.clamp(result.total):
            result = run_pipeline(self._records, self.query, self.config)
        self._result = result
        self._cache_key = (self._version, self.query.fingerprint())

    def distinct_values(self, field_name: str) -> list[Any]:
        """Filter options for a field, taken from the loaded records."""
        return distinct_values(self._records, field_name)

    # -- query -------------------------------------------------------------

    def set_search_text(self, text: str | None) -> None:
        self.query.set_search_text(text)
        self._recompute()

    def set_filter(self, field_name: str, values: Iterable[Any] | None) -> None:
        self.query.set_filter(field_name, values)
        self._recompute()

    def toggle_filter_value(self, field_name: str, value: Any, checked: bool) -> None:
        self.query.toggle_filter_value(field_name, value, checked)
        self._recompute()

    def set_filters(self, filters: Mapping[str, Iterable[Any]] | None) -> None:
        self.query.set_filters(filters)
        self._recompute()

    def clear_filters(self) -> None:
        self.query.clear_filters()
        self._recompute()

    def set_date_range(self, start: Any = None, end: Any = None) -> None:
        self.query.set_date_range(start, end)
        self._recompute()

    def set_sort(self, key: str | None, order: str | None) -> None:
        self.query.set_sort(key, order)
        self._recompute()

    def toggle_sort(self, key: str) -> None:
        self.query.toggle_sort(key)
        self._recompute()

    def set_page_index(self, page_index: int) -> None:
        self.query.set_page_index(page_index)
        self._recompute()

    def set_page_size(self, page_size: int) -> None:
        self.query.set_page_size(page_size)
        self._recompute()

    # -- selection ---------------------------------------------------------

    def toggle_row(self, identity: Identity, checked: bool) -> None:
        self.selection.toggle_row(identity, checked)

    def toggle_visible(self, checked: bool) -> None:
        """Select or deselect every record on the current page."""
        self.selection.toggle_visible(checked, self.visible_identities)

    def is_selected(self, identity: Identity) -> bool:
        return self.selection.is_selected(identity)

    @property
    def all_visible_selected(self) -> bool:
        return self.selection.all_selected(self.visible_identities)

    def selected_records(self) -> list[Record]:
        """Records of the current collection that are selected."""
        return [
            record
            for record in self._records
            if self.selection.is_selected(self.config.identity_of(record))
        ]

    def clear_selection(self) -> None:
        self.selection.clear()

    def reset(self) -> None:
        """
        Forget query and selection.

        Used when the screen switches to an independent list (another record
        type), where neither the old filters nor the old selection apply.
        """
        self.selection.clear()
        self.query = QueryDescriptor(page_size=self.query.page_size)
        self._recompute()

    # -- serialization -----------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize query and selection (records are not part of the state)."""
        return {
            "query": self.query.to_dict(),
            "selected": self.selection.ordered(),
        }

    @classmethod
    def from_dict(
        cls,
        config: ListConfig,
        data: Mapping[str, Any] | None,
        records: Sequence[Record] = (),
    ) -> "ListView":
        data = data if isinstance(data, Mapping) else {}
        selected = data.get("selected")
        return cls(
            config,
            query=QueryDescriptor.from_dict(data.get("query")),
            records=records,
            selected=selected if isinstance(selected, (list, tuple)) else (),
        )
