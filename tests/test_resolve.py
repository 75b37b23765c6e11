"""Tests for resolve.py — exact, case-sensitive name lookup."""

import pytest

from todi_cli.exceptions import NotFoundError, NotUniqueError, ResolutionError
from todi_cli.models import Project, Task
from todi_cli.resolve import find_unique

PROJECTS = [
    Project(id="1", name="Inbox"),
    Project(id="2", name="Work"),
    Project(id="3", name="Work"),
]


class TestFindUnique:
    def test_single_match(self):
        assert find_unique(PROJECTS, "Inbox", "project").id == "1"

    def test_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            find_unique(PROJECTS, "Missing", "project")
        assert str(exc_info.value) == "project not found: Missing"
        assert exc_info.value.exit_code == 1

    def test_not_unique(self):
        with pytest.raises(NotUniqueError) as exc_info:
            find_unique(PROJECTS, "Work", "project")
        assert str(exc_info.value) == "project name not unique: Work (use --id)"

    def test_case_sensitive(self):
        with pytest.raises(NotFoundError):
            find_unique(PROJECTS, "inbox", "project")

    def test_no_trimming(self):
        with pytest.raises(NotFoundError):
            find_unique(PROJECTS, "Inbox ", "project")

    def test_task_matches_content(self):
        tasks = [Task(id="t1", content="Write docs"), Task(id="t2", content="Ship")]
        assert find_unique(tasks, "Ship", "task").id == "t2"

    def test_task_not_unique_message(self):
        tasks = [Task(id="t1", content="Ship"), Task(id="t2", content="Ship")]
        with pytest.raises(NotUniqueError) as exc_info:
            find_unique(tasks, "Ship", "task")
        assert str(exc_info.value) == "task title not unique: Ship (use --id)"

    def test_caller_hint(self):
        with pytest.raises(NotUniqueError) as exc_info:
            find_unique(PROJECTS, "Work", "project", hint="--parent-id")
        assert str(exc_info.value) == "project name not unique: Work (use --parent-id)"

    def test_empty_hint_suggests_nothing(self):
        with pytest.raises(NotUniqueError) as exc_info:
            find_unique(PROJECTS, "Work", "project", hint="")
        assert str(exc_info.value) == "project name not unique: Work"

    def test_dicts_supported(self):
        items = [{"id": "l1", "name": "home"}]
        assert find_unique(items, "home", "label")["id"] == "l1"

    def test_empty_collection(self):
        with pytest.raises(ResolutionError):
            find_unique([], "anything", "section")

    def test_repeatable(self):
        first = find_unique(PROJECTS, "Inbox", "project")
        second = find_unique(PROJECTS, "Inbox", "project")
        assert first == second
