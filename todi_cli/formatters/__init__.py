"""Output formatting package for todi-cli.

Re-exports all public names so consumers can do:
    from todi_cli.formatters import format_tasks_table
"""

from todi_cli.formatters._activity import (
    format_activities_plain,
    format_activities_table,
)
from todi_cli.formatters._core import (
    mutation_response,
    output_item,
    output_list,
    output_mutation,
    output_raw,
    pretty_print,
    status_line,
)
from todi_cli.formatters._entities import (
    format_comment_detail,
    format_comment_plain,
    format_comments_plain,
    format_comments_table,
    format_label_detail,
    format_label_plain,
    format_labels_plain,
    format_labels_table,
    format_project_detail,
    format_project_plain,
    format_projects_plain,
    format_projects_table,
    format_section_detail,
    format_section_plain,
    format_sections_plain,
    format_sections_table,
    format_upload_detail,
    format_upload_plain,
    format_user_detail,
    format_user_plain,
)
from todi_cli.formatters._table import (
    _CONTROL_RE,
    _sanitize_str,
    _table,
    _trunc,
)
from todi_cli.formatters._tasks import (
    format_task_detail,
    format_task_plain,
    format_tasks_plain,
    format_tasks_table,
)

__all__ = [
    "_CONTROL_RE",
    "_sanitize_str",
    "_table",
    "_trunc",
    "format_activities_plain",
    "format_activities_table",
    "format_comment_detail",
    "format_comment_plain",
    "format_comments_plain",
    "format_comments_table",
    "format_label_detail",
    "format_label_plain",
    "format_labels_plain",
    "format_labels_table",
    "format_project_detail",
    "format_project_plain",
    "format_projects_plain",
    "format_projects_table",
    "format_section_detail",
    "format_section_plain",
    "format_sections_plain",
    "format_sections_table",
    "format_task_detail",
    "format_task_plain",
    "format_tasks_plain",
    "format_tasks_table",
    "format_upload_detail",
    "format_upload_plain",
    "format_user_detail",
    "format_user_plain",
    "mutation_response",
    "output_item",
    "output_list",
    "output_mutation",
    "output_raw",
    "pretty_print",
    "status_line",
]
