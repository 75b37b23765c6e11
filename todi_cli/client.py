"""
TodoistClient — public Python API for the Todoist REST v1 endpoints.

One method per remote operation. Page methods return (items, next_cursor),
"_all" methods aggregate every page, find_* methods resolve a human name to
the single matching entity. Mutations return (entity_or_None, raw_bytes) so
callers can echo the server response verbatim in JSON mode.
"""

from __future__ import annotations

import json
import sys
import urllib.parse
from typing import Any, TextIO

from todi_cli import config
from todi_cli.api import (
    _http_request,
    build_url,
    decode_json,
    encode_multipart,
    normalize_base,
    read_upload_file,
    upload_file_name,
)
from todi_cli.exceptions import ApiError, DecodeError, HTTPError
from todi_cli.models import (
    Activity,
    Comment,
    CommentDraft,
    Label,
    LabelDraft,
    Project,
    ProjectDraft,
    QuickAddDraft,
    Section,
    SectionDraft,
    Task,
    TaskDraft,
    Upload,
    User,
)
from todi_cli.pagination import collect_pages
from todi_cli.resolve import find_unique


def _quote(value: str) -> str:
    return urllib.parse.quote(str(value), safe="")


def _expect_object_response(result: Any, operation: str) -> dict[str, Any]:
    """Ensure an endpoint returned a JSON object."""
    if isinstance(result, dict):
        return result
    raise DecodeError(f"{operation}: expected JSON object, got {type(result).__name__}")


class TodoistClient:
    def __init__(
        self,
        token: str,
        *,
        base_url: str = config.DEFAULT_API_BASE,
        verbose: bool = False,
        err: TextIO | None = None,
        timeout: int = config.HTTP_TIMEOUT_SECONDS,
    ):
        self.token = token
        self.base_url = normalize_base(base_url)
        self.verbose = verbose
        self.err = err
        self.timeout = timeout

    # -----------------------------------------------------------------------
    # Transport
    # -----------------------------------------------------------------------

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
        content_type: str | None = None,
    ) -> bytes:
        url = build_url(self.base_url, config.API_PREFIX + path, params)
        headers = {"Authorization": f"Bearer {self.token}"}
        data = None
        if body is not None:
            if isinstance(body, bytes):
                data = body
                headers["Content-Type"] = content_type or "application/octet-stream"
            else:
                data = json.dumps(body).encode("utf-8")
                headers["Content-Type"] = "application/json"
        if self.verbose:
            print(f"{method} {url}", file=self.err or sys.stderr)
        try:
            return _http_request(url, data, headers, method, timeout=self.timeout)
        except HTTPError as e:
            raise ApiError(e.code, e.reason, e.body) from e

    def _request(self, method: str, path: str, **kwargs: Any) -> tuple[Any, bytes]:
        """Send a request and decode a non-empty body. Returns (decoded_or_None, raw)."""
        raw = self._send(method, path, **kwargs)
        if not raw.strip():
            return None, raw
        return decode_json(raw), raw

    def _get(self, path: str, model: Any, operation: str) -> Any:
        data, _raw = self._request("GET", path)
        if data is None:
            raise DecodeError(f"{operation}: empty response body")
        return model.from_dict(_expect_object_response(data, operation))

    def _mutate(self, method: str, path: str, model: Any, body: Any = None) -> tuple[Any, bytes]:
        data, raw = self._request(method, path, body=body)
        if data is None:
            return None, raw
        return model.from_dict(_expect_object_response(data, f"{method} {path}")), raw

    def _list_page(
        self, path: str, model: Any, params: dict[str, Any] | None = None
    ) -> tuple[list[Any], str]:
        data, _raw = self._request("GET", path, params=params)
        if data is None:
            return [], ""
        data = _expect_object_response(data, f"list {path.strip('/')}")
        results = data.get("results") or []
        if not isinstance(results, list):
            raise DecodeError(f"list {path.strip('/')}: results is not a list")
        return [model.from_dict(item) for item in results], str(data.get("next_cursor") or "")

    def _list_all(
        self,
        path: str,
        model: Any,
        params: dict[str, Any] | None = None,
        page_size: int = config.PAGE_LIMIT,
    ) -> list[Any]:
        return collect_pages(
            lambda page_params: self._list_page(path, model, page_params),
            params,
            page_size=page_size,
        )

    # -----------------------------------------------------------------------
    # Tasks
    # -----------------------------------------------------------------------

    def list_tasks(self, params: dict[str, Any] | None = None) -> tuple[list[Task], str]:
        return self._list_page("/tasks", Task, params)

    def list_tasks_all(self, params: dict[str, Any] | None = None) -> list[Task]:
        return self._list_all("/tasks", Task, params)

    def get_task(self, task_id: str) -> Task:
        return self._get(f"/tasks/{_quote(task_id)}", Task, "get task")

    def create_task(self, draft: TaskDraft) -> tuple[Task | None, bytes]:
        return self._mutate("POST", "/tasks", Task, draft.to_payload())

    def update_task(self, task_id: str, draft: TaskDraft) -> tuple[Task | None, bytes]:
        return self._mutate("POST", f"/tasks/{_quote(task_id)}", Task, draft.to_payload())

    def delete_task(self, task_id: str) -> bytes:
        return self._send("DELETE", f"/tasks/{_quote(task_id)}")

    def close_task(self, task_id: str) -> bytes:
        return self._send("POST", f"/tasks/{_quote(task_id)}/close")

    def reopen_task(self, task_id: str) -> bytes:
        return self._send("POST", f"/tasks/{_quote(task_id)}/reopen")

    def quick_add(self, draft: QuickAddDraft) -> tuple[Task | None, bytes]:
        """Quick-add wraps the created task in a ``{"task": {...}}`` envelope."""
        data, raw = self._request("POST", "/tasks/quick", body=draft.to_payload())
        if data is None:
            return None, raw
        envelope = _expect_object_response(data, "quick add")
        task = envelope.get("task")
        if task is None:
            return None, raw
        return Task.from_dict(task), raw

    # -----------------------------------------------------------------------
    # Projects
    # -----------------------------------------------------------------------

    def list_projects(self, params: dict[str, Any] | None = None) -> tuple[list[Project], str]:
        return self._list_page("/projects", Project, params)

    def list_projects_all(self) -> list[Project]:
        return self._list_all("/projects", Project)

    def get_project(self, project_id: str) -> Project:
        return self._get(f"/projects/{_quote(project_id)}", Project, "get project")

    def create_project(self, draft: ProjectDraft) -> tuple[Project | None, bytes]:
        return self._mutate("POST", "/projects", Project, draft.to_payload())

    def update_project(
        self, project_id: str, draft: ProjectDraft
    ) -> tuple[Project | None, bytes]:
        return self._mutate("POST", f"/projects/{_quote(project_id)}", Project, draft.to_payload())

    def archive_project(self, project_id: str) -> tuple[Project | None, bytes]:
        return self._mutate("POST", f"/projects/{_quote(project_id)}/archive", Project)

    def unarchive_project(self, project_id: str) -> tuple[Project | None, bytes]:
        return self._mutate("POST", f"/projects/{_quote(project_id)}/unarchive", Project)

    def delete_project(self, project_id: str) -> bytes:
        return self._send("DELETE", f"/projects/{_quote(project_id)}")

    # -----------------------------------------------------------------------
    # Labels
    # -----------------------------------------------------------------------

    def list_labels(self, params: dict[str, Any] | None = None) -> tuple[list[Label], str]:
        return self._list_page("/labels", Label, params)

    def list_labels_all(self) -> list[Label]:
        return self._list_all("/labels", Label)

    def get_label(self, label_id: str) -> Label:
        return self._get(f"/labels/{_quote(label_id)}", Label, "get label")

    def create_label(self, draft: LabelDraft) -> tuple[Label | None, bytes]:
        return self._mutate("POST", "/labels", Label, draft.to_payload())

    def update_label(self, label_id: str, draft: LabelDraft) -> tuple[Label | None, bytes]:
        return self._mutate("POST", f"/labels/{_quote(label_id)}", Label, draft.to_payload())

    def delete_label(self, label_id: str) -> bytes:
        return self._send("DELETE", f"/labels/{_quote(label_id)}")

    # -----------------------------------------------------------------------
    # Sections
    # -----------------------------------------------------------------------

    def list_sections(self, params: dict[str, Any] | None = None) -> tuple[list[Section], str]:
        return self._list_page("/sections", Section, params)

    def list_sections_all(self, params: dict[str, Any] | None = None) -> list[Section]:
        return self._list_all("/sections", Section, params)

    def get_section(self, section_id: str) -> Section:
        return self._get(f"/sections/{_quote(section_id)}", Section, "get section")

    def create_section(self, draft: SectionDraft) -> tuple[Section | None, bytes]:
        return self._mutate("POST", "/sections", Section, draft.to_payload())

    def update_section(
        self, section_id: str, draft: SectionDraft
    ) -> tuple[Section | None, bytes]:
        return self._mutate("POST", f"/sections/{_quote(section_id)}", Section, draft.to_payload())

    def delete_section(self, section_id: str) -> bytes:
        return self._send("DELETE", f"/sections/{_quote(section_id)}")

    # -----------------------------------------------------------------------
    # Comments
    # -----------------------------------------------------------------------

    def list_comments(self, params: dict[str, Any] | None = None) -> tuple[list[Comment], str]:
        return self._list_page("/comments", Comment, params)

    def list_comments_all(self, params: dict[str, Any] | None = None) -> list[Comment]:
        return self._list_all("/comments", Comment, params)

    def get_comment(self, comment_id: str) -> Comment:
        return self._get(f"/comments/{_quote(comment_id)}", Comment, "get comment")

    def create_comment(self, draft: CommentDraft) -> tuple[Comment | None, bytes]:
        return self._mutate("POST", "/comments", Comment, draft.to_payload())

    def update_comment(
        self, comment_id: str, draft: CommentDraft
    ) -> tuple[Comment | None, bytes]:
        return self._mutate("POST", f"/comments/{_quote(comment_id)}", Comment, draft.to_payload())

    def delete_comment(self, comment_id: str) -> bytes:
        return self._send("DELETE", f"/comments/{_quote(comment_id)}")

    # -----------------------------------------------------------------------
    # Activity log
    # -----------------------------------------------------------------------

    def list_activities(
        self, params: dict[str, Any] | None = None
    ) -> tuple[list[Activity], str]:
        return self._list_page("/activities", Activity, params)

    def list_activities_all(self, params: dict[str, Any] | None = None) -> list[Activity]:
        return self._list_all("/activities", Activity, params, page_size=config.ACTIVITY_PAGE_LIMIT)

    # -----------------------------------------------------------------------
    # Uploads
    # -----------------------------------------------------------------------

    def upload_file(
        self, path: str, *, project_id: str | None = None, file_name: str | None = None
    ) -> tuple[Upload | None, bytes]:
        """Upload a local file as multipart/form-data."""
        content = read_upload_file(path)
        name = upload_file_name(path, file_name)
        body, content_type = encode_multipart(
            {"project_id": project_id, "file_name": file_name},
            "file",
            name,
            content,
        )
        data, raw = self._request("POST", "/uploads", body=body, content_type=content_type)
        if data is None:
            return None, raw
        return Upload.from_dict(_expect_object_response(data, "upload file")), raw

    def delete_upload(self, file_url: str) -> bytes:
        return self._send("DELETE", "/uploads", params={"file_url": file_url})

    # -----------------------------------------------------------------------
    # User
    # -----------------------------------------------------------------------

    def get_user(self) -> User:
        return self._get("/user", User, "get user")

    # -----------------------------------------------------------------------
    # Name resolution
    # -----------------------------------------------------------------------

    def find_project(self, name: str, hint: str | None = None) -> Project:
        return find_unique(self.list_projects_all(), name, "project", hint)

    def find_project_id(self, name: str, hint: str | None = None) -> str:
        return self.find_project(name, hint).id

    def find_task(self, content: str, hint: str | None = None) -> Task:
        return find_unique(self.list_tasks_all(), content, "task", hint)

    def find_task_id(self, content: str, hint: str | None = None) -> str:
        return self.find_task(content, hint).id

    def find_label(self, name: str) -> Label:
        return find_unique(self.list_labels_all(), name, "label")

    def find_label_id(self, name: str) -> str:
        return self.find_label(name).id

    def find_section(
        self, name: str, project_id: str | None = None, hint: str | None = None
    ) -> Section:
        params = {"project_id": project_id} if project_id else None
        return find_unique(self.list_sections_all(params), name, "section", hint)

    def find_section_id(
        self, name: str, project_id: str | None = None, hint: str | None = None
    ) -> str:
        return self.find_section(name, project_id, hint).id
