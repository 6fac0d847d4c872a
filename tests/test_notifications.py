import logging

from record_console.models.common import NotificationType
from record_console.services.notifications import CollectingNotificationSink


def test_collecting_sink_drains_in_order():
    sink = CollectingNotificationSink()
    sink.success("Lead added.")
    sink.error("Duplicate entry", title="Failed to Add")
    drained = sink.drain()
    assert [(n.type, n.text) for n in drained] == [
        (NotificationType.SUCCESS, "Lead added."),
        (NotificationType.ERROR, "Duplicate entry"),
    ]
    assert drained[1].to_dict()["title"] == "Failed to Add"
    assert sink.drain() == []


def test_collecting_sink_logs_errors_as_warnings(caplog):
    sink = CollectingNotificationSink()
    with caplog.at_level(logging.INFO):
        sink.info("Nothing to export.")
        sink.error("Record not found")
    levels = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert (logging.INFO, "info: Nothing to export.") in levels
    assert (logging.WARNING, "error: Record not found") in levels
