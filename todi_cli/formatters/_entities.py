"""Formatters for projects, labels, sections, comments, uploads, and the user."""

from todi_cli.formatters._table import _detail, _plain_rows, _table, _trunc
from todi_cli.formatters._tasks import CONTENT_WIDTH, _footer

# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


def format_projects_table(projects, next_cursor=None):
    rows = [(p.id, p.name) for p in projects]
    return _table(["ID", "NAME"], rows, footer=_footer(len(projects), "projects", next_cursor))


def format_projects_plain(projects):
    return _plain_rows((p.id, p.name) for p in projects)


def format_project_plain(project):
    return format_projects_plain([project])


def format_project_detail(project):
    return _detail(
        [
            ("ID", project.id),
            ("Name", project.name),
            ("Parent", project.parent_id or None),
            ("Color", project.color or None),
            ("Favorite", project.is_favorite),
            ("View", project.view_style or None),
            ("Archived", True if project.is_archived else None),
        ]
    )


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def _label_row(label):
    return (label.id, label.name, label.color, label.order, label.is_favorite)


def format_labels_table(labels, next_cursor=None):
    return _table(
        ["ID", "NAME", "COLOR", "ORDER", "FAVORITE"],
        [_label_row(lbl) for lbl in labels],
        footer=_footer(len(labels), "labels", next_cursor),
    )


def format_labels_plain(labels):
    return _plain_rows(_label_row(lbl) for lbl in labels)


def format_label_plain(label):
    return format_labels_plain([label])


def format_label_detail(label):
    return _detail(
        [
            ("ID", label.id),
            ("Name", label.name),
            ("Color", label.color),
            ("Order", label.order),
            ("Favorite", label.is_favorite),
        ]
    )


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _section_row(section):
    return (section.id, section.name, section.project_id, section.order)


def format_sections_table(sections, next_cursor=None):
    return _table(
        ["ID", "NAME", "PROJECT", "ORDER"],
        [_section_row(s) for s in sections],
        footer=_footer(len(sections), "sections", next_cursor),
    )


def format_sections_plain(sections):
    return _plain_rows(_section_row(s) for s in sections)


def format_section_plain(section):
    return format_sections_plain([section])


def format_section_detail(section):
    return _detail(
        [
            ("ID", section.id),
            ("Name", section.name),
            ("Project", section.project_id),
            ("Order", section.order),
            ("Collapsed", True if section.is_collapsed else None),
            ("Archived", True if section.is_archived else None),
        ]
    )


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


def format_comments_table(comments, next_cursor=None):
    rows = [(c.id, _trunc(c.content, CONTENT_WIDTH), c.posted_at) for c in comments]
    return _table(
        ["ID", "CONTENT", "POSTED"],
        rows,
        footer=_footer(len(comments), "comments", next_cursor),
    )


def format_comments_plain(comments):
    return _plain_rows((c.id, c.content, c.posted_at) for c in comments)


def format_comment_plain(comment):
    return format_comments_plain([comment])


def format_comment_detail(comment):
    attachment = comment.file_attachment
    return _detail(
        [
            ("ID", comment.id),
            ("Content", comment.content),
            ("Posted", comment.posted_at),
            ("Attachment", (attachment.file_name or attachment.file_url) if attachment else None),
        ]
    )


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------


def format_upload_detail(upload):
    return _detail(
        [
            ("File", upload.file_name),
            ("URL", upload.file_url),
            ("Type", upload.file_type or None),
            ("Size", upload.file_size or None),
            ("State", upload.upload_state or None),
        ]
    )


def format_upload_plain(upload):
    return _plain_rows([(upload.file_url, upload.file_name, upload.file_type, upload.file_size)])


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


def format_user_detail(user):
    return _detail([("ID", user.id), ("Email", user.email), ("Name", user.full_name)])


def format_user_plain(user):
    return _plain_rows([(user.id, user.email, user.full_name)])
