"""Task formatters: list table, plain rows, and single-task detail."""

from todi_cli.formatters._table import _detail, _plain_rows, _table, _trunc

CONTENT_WIDTH = 80

_PRIORITY_LABELS = {4: "p1", 3: "p2", 2: "p3", 1: "p4"}


def _footer(count, noun, next_cursor=None):
    footer = f"Total: {count} {noun}"
    if next_cursor:
        footer += f"\nNext page: --cursor {next_cursor}"
    return footer


def format_tasks_table(tasks, next_cursor=None):
    rows = [(t.id, _trunc(t.content, CONTENT_WIDTH), t.due_summary()) for t in tasks]
    return _table(["ID", "CONTENT", "DUE"], rows, footer=_footer(len(tasks), "tasks", next_cursor))


def format_tasks_plain(tasks):
    return _plain_rows((t.id, t.content, t.due_summary()) for t in tasks)


def format_task_plain(task):
    return format_tasks_plain([task])


def format_task_detail(task):
    """Human view of a single task. API priority 4 is shown as p1 (urgent)."""
    return _detail(
        [
            ("ID", task.id),
            ("Content", task.content),
            ("Due", task.due_summary()),
            ("Description", task.description or None),
            ("Project", task.project_id or None),
            ("Section", task.section_id or None),
            ("Labels", ", ".join(task.labels) if task.labels else None),
            ("Priority", _PRIORITY_LABELS.get(task.priority, str(task.priority))),
        ]
    )
