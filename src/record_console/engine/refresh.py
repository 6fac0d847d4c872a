"""
Mutation-refresh coordinator.

Every create, update or delete goes through the coordinator, which applies
one protocol to all of them:

- success: notify, reload the whole list from the record service, reconcile
  the selection against the reloaded identities and clamp the page; the
  query is otherwise left alone
- business error: notify with the server's message; no reload
- transport error (an outcome or any exception from the service): notify
  with a generic message; no reload

There is no optimistic patching of the local list. Other screens and
background jobs write to the same store, so only a full reload is trusted.
"""

from typing import Awaitable, Callable, Iterable

from record_console.engine.list_view import ListView
from record_console.lib import logs
from record_console.models.common import MutationOutcome, OutcomeKind
from record_console.models.records import Identity, Record
from record_console.services.notifications import NotificationSink
from record_console.services.record_service import RecordService

LOG = logs.logger(__file__)

GENERIC_FAILURE = "Something went wrong. Please try again."
LOAD_FAILURE = "Could not load records. Please try again."

_FAILURE_TITLES = {
    "create": "Failed to Add",
    "update": "Failed to Update",
    "delete": "Delete Failed",
    "delete_many": "Deletion Failed",
}


class MutationRefreshCoordinator:
    """
    Runs mutations against a record service and keeps a ListView in sync.

    Args:
        service: Record service of the screen.
        view: The screen's list engine.
        notifications: Sink for user-facing messages.
        entity_label: Singular name used in messages ("Lead", "Unit").
    """

    def __init__(
        self,
        service: RecordService,
        view: ListView,
        notifications: NotificationSink,
        entity_label: str = "Record",
    ) -> None:
        self.service = service
        self.view = view
        self.notifications = notifications
        self.entity_label = entity_label

    async def reload(self) -> bool:
        """
        Fetch the full collection and apply it to the view.

        Returns:
            True if fresh records were applied. False when the fetch failed
            (one error notification, previous records kept) or a newer reload
            superseded this one.
        """
        token = self.view.begin_reload()
        try:
            result = await self.service.list_records()
        except Exception:
            if self.view.is_stale(token):
                LOG.debug("Ignoring failure of superseded reload - token:%s", token)
                return False
            LOG.error("Record reload failed", exc_info=True)
            self.notifications.error(LOAD_FAILURE, title="Load Failed")
            return False
        applied = self.view.apply_reload(token, result.records)
        if applied:
            LOG.info(
                "Reloaded %s record(s) - total:%s selected:%s",
                len(result.records),
                self.view.total,
                self.view.selection.count,
            )
        return applied

    async def create(self, payload: Record) -> MutationOutcome:
        return await self._run(
            "create",
            lambda: self.service.create_record(payload),
            f"{self.entity_label} added.",
        )

    async def update(self, payload: Record) -> MutationOutcome:
        return await self._run(
            "update",
            lambda: self.service.update_record(payload),
            f"{self.entity_label} updated.",
        )

    async def delete(self, identity: Identity) -> MutationOutcome:
        return await self._run(
            "delete",
            lambda: self.service.delete_record(identity),
            f"{self.entity_label} deleted.",
        )

    async def delete_many(self, identities: Iterable[Identity]) -> MutationOutcome:
        """
        Delete several records (typically the current selection).

        An empty request is a no-op that produces no notification.
        """
        targets = list(identities)
        if not targets:
            return MutationOutcome.success(message="Nothing to delete.")
        return await self._run(
            "delete_many",
            lambda: self.service.delete_records(targets),
            f"{len(targets)} {self.entity_label.lower()}(s) deleted.",
        )

    async def _run(
        self,
        action: str,
        call: Callable[[], Awaitable[MutationOutcome]],
        success_text: str,
    ) -> MutationOutcome:
        try:
            outcome = await call()
        except Exception as exc:
            LOG.error("Mutation %s failed in transport", action, exc_info=True)
            outcome = MutationOutcome.transport_error(message=str(exc) or None)

        self._handle(action, outcome, success_text)
        if outcome.ok:
            await self.reload()
        return outcome

    def _handle(self, action: str, outcome: MutationOutcome, success_text: str) -> None:
        LOG.info(
            "Mutation %s - kind:%s affected_id:%s",
            action,
            outcome.kind.value,
            outcome.affected_id,
        )
        if outcome.kind is OutcomeKind.SUCCESS:
            self.notifications.success(success_text)
        elif outcome.kind is OutcomeKind.BUSINESS_ERROR:
            self.notifications.error(
                outcome.message or GENERIC_FAILURE, title=_failure_title(action)
            )
        else:
            self.notifications.error(GENERIC_FAILURE, title=_failure_title(action))


def _failure_title(action: str) -> str:
    return _FAILURE_TITLES.get(action, "Operation Failed")
