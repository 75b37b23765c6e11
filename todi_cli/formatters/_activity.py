"""Activity log formatters."""

from todi_cli.formatters._table import _plain_rows, _table, _trunc
from todi_cli.formatters._tasks import _footer

EXTRA_WIDTH = 50


def _activity_summary(event):
    """Best-effort one-line description from ``extra_data``."""
    extra = event.extra_data or {}
    for key in ("content", "name", "last_content", "last_name"):
        value = extra.get(key)
        if value:
            return str(value)
    return ""


def _activity_row(event):
    return (
        event.id,
        event.event_date,
        event.event_type,
        event.object_type,
        event.object_id,
        _trunc(_activity_summary(event), EXTRA_WIDTH),
    )


def format_activities_table(events, next_cursor=None):
    return _table(
        ["ID", "DATE", "EVENT", "OBJECT", "OBJECT ID", "SUMMARY"],
        [_activity_row(e) for e in events],
        footer=_footer(len(events), "events", next_cursor),
    )


def format_activities_plain(events):
    return _plain_rows(
        (e.id, e.event_date, e.event_type, e.object_type, e.object_id, _activity_summary(e))
        for e in events
    )
