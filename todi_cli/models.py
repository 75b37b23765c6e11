"""
Typed models for Todoist entities and command request payloads.

Entities are read-only snapshots decoded from API responses. Drafts are the
request bodies sent on create/update; a field left as None is omitted from
the JSON body, while an explicit empty string or False is sent as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from todi_cli import config
from todi_cli._utils import _get_field
from todi_cli.exceptions import DecodeError, UsageError


def _expect_object(data: Any, kind: str) -> dict[str, Any]:
    if isinstance(data, dict):
        return data
    raise DecodeError(f"expected {kind} object, got {type(data).__name__}")


def _str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _int(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Due:
    date: str = ""
    datetime: str = ""
    string: str = ""
    timezone: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Due | None:
        if not data:
            return None
        data = _expect_object(data, "due")
        return cls(
            date=_str(data.get("date")),
            datetime=_str(data.get("datetime")),
            string=_str(data.get("string")),
            timezone=_str(data.get("timezone")),
        )

    def summary(self) -> str:
        return self.date or self.datetime or self.string

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "datetime": self.datetime,
            "string": self.string,
            "timezone": self.timezone,
        }


@dataclass(frozen=True)
class Task:
    id: str
    content: str
    description: str = ""
    project_id: str = ""
    section_id: str = ""
    labels: tuple[str, ...] = ()
    priority: int = 1
    due: Due | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Task:
        data = _expect_object(data, "task")
        return cls(
            id=_str(data.get("id")),
            content=_str(data.get("content")),
            description=_str(data.get("description")),
            project_id=_str(data.get("project_id")),
            section_id=_str(data.get("section_id")),
            labels=tuple(_str(v) for v in data.get("labels") or ()),
            priority=_int(data.get("priority")) or 1,
            due=Due.from_dict(data.get("due")),
        )

    def due_summary(self) -> str:
        return self.due.summary() if self.due else ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "content": self.content}
        if self.description:
            out["description"] = self.description
        out["project_id"] = self.project_id
        if self.section_id:
            out["section_id"] = self.section_id
        out["labels"] = list(self.labels)
        out["priority"] = self.priority
        out["due"] = self.due.to_dict() if self.due else None
        return out


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    parent_id: str = ""
    color: str = ""
    is_favorite: bool = False
    view_style: str = ""
    is_archived: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Project:
        data = _expect_object(data, "project")
        return cls(
            id=_str(data.get("id")),
            name=_str(data.get("name")),
            parent_id=_str(data.get("parent_id")),
            color=_str(data.get("color")),
            is_favorite=bool(data.get("is_favorite")),
            view_style=_str(data.get("view_style")),
            is_archived=bool(data.get("is_archived")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.parent_id:
            out["parent_id"] = self.parent_id
        if self.color:
            out["color"] = self.color
        out["is_favorite"] = self.is_favorite
        if self.view_style:
            out["view_style"] = self.view_style
        if self.is_archived:
            out["is_archived"] = True
        return out


@dataclass(frozen=True)
class Label:
    id: str
    name: str
    color: str = ""
    order: int = 0
    is_favorite: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Label:
        data = _expect_object(data, "label")
        return cls(
            id=_str(data.get("id")),
            name=_str(data.get("name")),
            color=_str(data.get("color")),
            order=_int(data.get("order")),
            is_favorite=bool(data.get("is_favorite")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.color:
            out["color"] = self.color
        if self.order:
            out["order"] = self.order
        if self.is_favorite:
            out["is_favorite"] = True
        return out


@dataclass(frozen=True)
class Section:
    id: str
    name: str
    project_id: str = ""
    order: int = 0
    is_archived: bool = False
    is_deleted: bool = False
    is_collapsed: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Section:
        data = _expect_object(data, "section")
        return cls(
            id=_str(data.get("id")),
            name=_str(data.get("name")),
            project_id=_str(data.get("project_id")),
            order=_int(_get_field(data, "section_order", "order")),
            is_archived=bool(data.get("is_archived")),
            is_deleted=bool(data.get("is_deleted")),
            is_collapsed=bool(data.get("is_collapsed")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "name": self.name,
            "order": self.order,
            "is_archived": self.is_archived,
            "is_deleted": self.is_deleted,
            "is_collapsed": self.is_collapsed,
        }


@dataclass(frozen=True)
class FileAttachment:
    """Upload metadata. Also the shape of a comment's ``file_attachment``."""

    file_url: str = ""
    file_name: str = ""
    file_size: int = 0
    file_type: str = ""
    resource_type: str = ""
    image: str = ""
    image_width: int = 0
    image_height: int = 0
    upload_state: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> FileAttachment:
        data = _expect_object(data, "upload")
        return cls(
            file_url=_str(data.get("file_url")),
            file_name=_str(data.get("file_name")),
            file_size=_int(data.get("file_size")),
            file_type=_str(data.get("file_type")),
            resource_type=_str(data.get("resource_type")),
            image=_str(data.get("image")),
            image_width=_int(data.get("image_width")),
            image_height=_int(data.get("image_height")),
            upload_state=_str(data.get("upload_state")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}


Upload = FileAttachment


@dataclass(frozen=True)
class Comment:
    id: str
    content: str
    task_id: str = ""
    project_id: str = ""
    posted_uid: str = ""
    posted_at: str = ""
    file_attachment: FileAttachment | None = None
    uids_to_notify: tuple[str, ...] = ()
    is_deleted: bool = False
    reactions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Comment:
        data = _expect_object(data, "comment")
        attachment = data.get("file_attachment")
        return cls(
            id=_str(data.get("id")),
            content=_str(data.get("content")),
            task_id=_str(_get_field(data, "task_id", "item_id")),
            project_id=_str(data.get("project_id")),
            posted_uid=_str(data.get("posted_uid")),
            posted_at=_str(data.get("posted_at")),
            file_attachment=FileAttachment.from_dict(attachment) if attachment else None,
            uids_to_notify=tuple(_str(v) for v in data.get("uids_to_notify") or ()),
            is_deleted=bool(data.get("is_deleted")),
            reactions=dict(data.get("reactions") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id}
        if self.task_id:
            out["task_id"] = self.task_id
        if self.project_id:
            out["project_id"] = self.project_id
        if self.posted_uid:
            out["posted_uid"] = self.posted_uid
        out["content"] = self.content
        if self.file_attachment:
            out["file_attachment"] = self.file_attachment.to_dict()
        if self.uids_to_notify:
            out["uids_to_notify"] = list(self.uids_to_notify)
        if self.is_deleted:
            out["is_deleted"] = True
        if self.posted_at:
            out["posted_at"] = self.posted_at
        if self.reactions:
            out["reactions"] = self.reactions
        return out


@dataclass(frozen=True)
class Activity:
    id: str
    event_type: str = ""
    object_type: str = ""
    object_id: str = ""
    parent_project_id: str = ""
    parent_item_id: str = ""
    initiator_id: str = ""
    event_date: str = ""
    extra_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Activity:
        data = _expect_object(data, "activity")
        return cls(
            id=_str(data.get("id")),
            event_type=_str(data.get("event_type")),
            object_type=_str(data.get("object_type")),
            object_id=_str(data.get("object_id")),
            parent_project_id=_str(data.get("parent_project_id")),
            parent_item_id=_str(data.get("parent_item_id")),
            initiator_id=_str(data.get("initiator_id")),
            event_date=_str(data.get("event_date")),
            extra_data=dict(data.get("extra_data") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {f.name: getattr(self, f.name) for f in fields(self)}
        if not self.extra_data:
            out.pop("extra_data")
        return out


@dataclass(frozen=True)
class User:
    id: str
    email: str = ""
    full_name: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> User:
        data = _expect_object(data, "user")
        return cls(
            id=_str(data.get("id")),
            email=_str(data.get("email")),
            full_name=_str(data.get("full_name")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email, "full_name": self.full_name}


# ---------------------------------------------------------------------------
# Request drafts
# ---------------------------------------------------------------------------


class _Draft:
    """Mixin: serialise dataclass fields, dropping those left as None."""

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is None:
                continue
            payload[f.name] = list(value) if isinstance(value, tuple) else value
        return payload

    def is_empty(self) -> bool:
        return not self.to_payload()


def _validate_due(due_string, due_date, due_datetime):
    given = [v for v in (due_string, due_date, due_datetime) if v is not None]
    if len(given) > 1:
        raise UsageError("use only one of --due, --due-date, or --due-datetime")


@dataclass(frozen=True)
class TaskDraft(_Draft):
    """Create/update body for a task."""

    content: str | None = None
    description: str | None = None
    project_id: str | None = None
    section_id: str | None = None
    labels: tuple[str, ...] | None = None
    priority: int | None = None
    assignee_id: str | None = None
    due_string: str | None = None
    due_date: str | None = None
    due_datetime: str | None = None
    due_lang: str | None = None
    duration: int | None = None
    duration_unit: str | None = None
    deadline_date: str | None = None

    def __post_init__(self):
        if self.priority is not None and not 1 <= self.priority <= 4:
            raise UsageError("priority must be 1-4")
        if self.duration_unit is not None and self.duration_unit not in config.VALID_DURATION_UNITS:
            raise UsageError("duration unit must be minute or day")
        _validate_due(self.due_string, self.due_date, self.due_datetime)

    @classmethod
    def from_namespace(cls, ns, **overrides) -> TaskDraft:
        values = {
            "content": getattr(ns, "new_content", None),
            "description": ns.description,
            "priority": ns.priority,
            "assignee_id": ns.assignee,
            "due_string": ns.due,
            "due_date": ns.due_date,
            "due_datetime": ns.due_datetime,
            "due_lang": ns.due_lang,
            "duration": ns.duration,
            "duration_unit": ns.duration_unit,
            "deadline_date": ns.deadline_date,
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class QuickAddDraft(_Draft):
    text: str
    note: str | None = None
    reminder: str | None = None
    auto_reminder: bool | None = None
    meta: bool | None = None

    def __post_init__(self):
        if not self.text.strip():
            raise UsageError("quick-add text required")

    @classmethod
    def from_namespace(cls, ns, text) -> QuickAddDraft:
        return cls(
            text=text,
            note=ns.note,
            reminder=ns.reminder,
            auto_reminder=True if ns.auto_reminder else None,
            meta=True if ns.meta else None,
        )


def _favorite_flag(ns) -> bool | None:
    favorite = getattr(ns, "favorite", False)
    unfavorite = getattr(ns, "unfavorite", False)
    if favorite and unfavorite:
        raise UsageError("cannot use --favorite and --unfavorite together")
    if favorite:
        return True
    if unfavorite:
        return False
    return None


def _view_style(value: str | None) -> str | None:
    if value is None:
        return None
    style = value.lower()
    if style not in config.VALID_VIEW_STYLES:
        raise UsageError("view must be list or board")
    return style


@dataclass(frozen=True)
class ProjectDraft(_Draft):
    name: str | None = None
    parent_id: str | None = None
    color: str | None = None
    is_favorite: bool | None = None
    view_style: str | None = None

    @classmethod
    def from_namespace(cls, ns, **overrides) -> ProjectDraft:
        values = {
            "name": getattr(ns, "name", None),
            "color": ns.color,
            "is_favorite": _favorite_flag(ns),
            "view_style": _view_style(ns.view),
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class LabelDraft(_Draft):
    name: str | None = None
    color: str | None = None
    order: int | None = None
    is_favorite: bool | None = None

    @classmethod
    def from_namespace(cls, ns, **overrides) -> LabelDraft:
        values = {
            "name": getattr(ns, "name", None),
            "color": ns.color,
            "order": ns.order,
            "is_favorite": _favorite_flag(ns),
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class SectionDraft(_Draft):
    name: str | None = None
    project_id: str | None = None
    order: int | None = None


@dataclass(frozen=True)
class CommentDraft(_Draft):
    content: str | None = None
    task_id: str | None = None
    project_id: str | None = None
    attachment: dict[str, Any] | None = None
    uids_to_notify: tuple[int, ...] | None = None
