"""
Command implementations for todi-cli.
Each cmd_*() function receives an argparse.Namespace and the runtime State
and handles one CLI command. A handler may return an int exit code; None
means success.

Remote calls live in client.py (TodoistClient). These thin wrappers turn
argparse values into drafts and resolved IDs, then hand the result to the
formatters.
"""

import getpass
import sys
from dataclasses import replace

from todi_cli import config
from todi_cli._utils import (
    append_unique_label,
    ensure_quick_add_label,
    join_args,
    merge_labels,
    normalize_csv,
    split_csv,
)
from todi_cli.api import _mask_token
from todi_cli.exceptions import (
    ConfigError,
    ConfirmationError,
    ResolutionError,
    UsageError,
)
from todi_cli.formatters import (
    format_activities_plain,
    format_activities_table,
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
    format_task_detail,
    format_task_plain,
    format_tasks_plain,
    format_tasks_table,
    format_upload_detail,
    format_upload_plain,
    format_user_detail,
    format_user_plain,
    mutation_response,
    output_item,
    output_list,
    output_mutation,
    status_line,
)
from todi_cli.models import (
    CommentDraft,
    LabelDraft,
    ProjectDraft,
    QuickAddDraft,
    SectionDraft,
    TaskDraft,
)

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _identifier(ns, noun):
    """Join the positional words into one identifier or fail with a usage error."""
    value = join_args(getattr(ns, "words", None))
    if not value:
        raise UsageError(f"{noun} identifier required")
    return value


def _page_params(ns, **extra):
    params = {"limit": ns.limit, "cursor": ns.cursor}
    params.update(extra)
    return params


def _read_line(state):
    line = state.stdin.readline()
    if not line:
        raise ConfirmationError("aborted")
    return line.strip()


def confirm_delete(state, label, identifier, forced):
    """Ask before a destructive call. --force skips the prompt.

    Non-interactive sessions (--no-input or stdin not a TTY) must pass --force.
    """
    if forced:
        return
    if state.no_input or not state.is_interactive():
        raise ConfirmationError("confirmation required (use --force)")
    print(f"Delete {label} '{identifier}'? [y/N]: ", end="", file=state.err, flush=True)
    response = _read_line(state).lower()
    if response not in ("y", "yes"):
        raise ConfirmationError("aborted")


def _check_pair(name_value, id_value, flag):
    if name_value and id_value:
        raise UsageError(f"cannot use {flag} and {flag}-id together")


def _resolve_project_id(client, name, project_id, flag="--project"):
    """Return a project ID from --project/--project-id style flags, or None."""
    _check_pair(name, project_id, flag)
    if project_id:
        return project_id
    if not name:
        return None
    return client.find_project_id(name, hint=f"{flag}-id")


def _resolve_task_id(client, identifier, force_id):
    if force_id:
        return identifier
    return client.find_task_id(identifier)


def _resolve_section_id(client, name, section_id, project_id):
    _check_pair(name, section_id, "--section")
    if section_id:
        return section_id
    if not name:
        return None
    return client.find_section_id(name, project_id, hint="--section-id")


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


def cmd_task_list(ns, state):
    project = ns.project
    words = join_args(ns.words)
    if words:
        if project:
            raise UsageError("project specified twice")
        project = words

    client = state.client()
    params = _page_params(ns, label=ns.label)
    if project:
        params["project_id"] = client.find_project_id(project, hint="")

    if ns.all_pages:
        tasks = client.list_tasks_all(params)
        output_list(state, tasks, format_tasks_table, format_tasks_plain)
        return
    tasks, next_cursor = client.list_tasks(params)
    output_list(state, tasks, format_tasks_table, format_tasks_plain, next_cursor, paged=True)


def cmd_task_get(ns, state):
    identifier = _identifier(ns, "task")
    client = state.client()
    task = client.get_task(identifier) if ns.force_id else client.find_task(identifier)
    output_item(state, task, format_task_detail, format_task_plain)


def _label_flags_given(ns):
    return ns.label is not None or ns.labels is not None


def cmd_task_add(ns, state):
    content = join_args(ns.words)
    if not content:
        raise UsageError("content required")
    # Validate flag combinations before any network call.
    draft = TaskDraft.from_namespace(ns, content=content)
    _check_pair(ns.project, ns.project_id, "--project")
    _check_pair(ns.section, ns.section_id, "--section")

    labels = merge_labels(ns.label, ns.labels)
    if not _label_flags_given(ns) and state.config.default_labels:
        labels = split_csv(state.config.default_labels)
    if state.label_cli:
        labels = append_unique_label(labels, config.CLI_LABEL)

    client = state.client()
    project_id = _resolve_project_id(client, ns.project, ns.project_id)
    if project_id is None and state.config.default_project:
        project_id = client.find_project_id(state.config.default_project, hint="")
    section_id = _resolve_section_id(client, ns.section, ns.section_id, project_id)

    draft = replace(
        draft,
        project_id=project_id,
        section_id=section_id,
        labels=tuple(labels) if labels else None,
    )
    task, raw = client.create_task(draft)
    output_mutation(state, task, raw, format_task_detail, format_task_plain)


def cmd_task_update(ns, state):
    identifier = _identifier(ns, "task")
    labels = None
    if _label_flags_given(ns):
        labels = tuple(merge_labels(ns.label, ns.labels))
    draft = TaskDraft.from_namespace(ns, labels=labels)
    if draft.is_empty():
        raise UsageError("no updates specified")

    client = state.client()
    task_id = _resolve_task_id(client, identifier, ns.force_id)
    task, raw = client.update_task(task_id, draft)
    output_mutation(state, task, raw, format_task_detail, format_task_plain)


def _task_action(ns, state, action):
    identifier = _identifier(ns, "task")
    client = state.client()
    task_id = _resolve_task_id(client, identifier, ns.force_id)
    if action == "close":
        raw = client.close_task(task_id)
        mutation_response(state, f"closed {task_id}", raw)
    elif action == "reopen":
        raw = client.reopen_task(task_id)
        mutation_response(state, f"reopened {task_id}", raw)
    else:
        confirm_delete(state, "task", identifier, ns.force)
        raw = client.delete_task(task_id)
        mutation_response(state, f"deleted {task_id}", raw)


def cmd_task_close(ns, state):
    _task_action(ns, state, "close")


def cmd_task_reopen(ns, state):
    _task_action(ns, state, "reopen")


def cmd_task_delete(ns, state):
    _task_action(ns, state, "delete")


def cmd_task_quick(ns, state):
    text = join_args(ns.words)
    if not text:
        raise UsageError("quick-add text required")
    if state.label_cli:
        text = ensure_quick_add_label(text, config.CLI_LABEL)
    draft = QuickAddDraft.from_namespace(ns, text)
    client = state.client()
    task, raw = client.quick_add(draft)
    output_mutation(state, task, raw, format_task_detail, format_task_plain)


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


def _resolve_project_identifier(client, identifier, force_id):
    if force_id:
        return identifier
    return client.find_project_id(identifier)


def cmd_project_list(ns, state):
    client = state.client()
    if ns.all_pages:
        output_list(state, client.list_projects_all(), format_projects_table, format_projects_plain)
        return
    projects, next_cursor = client.list_projects(_page_params(ns))
    output_list(
        state, projects, format_projects_table, format_projects_plain, next_cursor, paged=True
    )


def cmd_project_get(ns, state):
    identifier = _identifier(ns, "project")
    client = state.client()
    project = client.get_project(identifier) if ns.force_id else client.find_project(identifier)
    output_item(state, project, format_project_detail, format_project_plain)


def cmd_project_add(ns, state):
    name = join_args(ns.words)
    if not name:
        raise UsageError("project name required")
    draft = ProjectDraft.from_namespace(ns, name=name)
    _check_pair(ns.parent, ns.parent_id, "--parent")

    client = state.client()
    parent_id = _resolve_project_id(client, ns.parent, ns.parent_id, flag="--parent")
    project, raw = client.create_project(replace(draft, parent_id=parent_id))
    output_mutation(state, project, raw, format_project_detail, format_project_plain)


def cmd_project_update(ns, state):
    identifier = _identifier(ns, "project")
    draft = ProjectDraft.from_namespace(ns)
    if draft.is_empty():
        raise UsageError("no updates specified")
    client = state.client()
    project_id = _resolve_project_identifier(client, identifier, ns.force_id)
    project, raw = client.update_project(project_id, draft)
    output_mutation(state, project, raw, format_project_detail, format_project_plain)


def cmd_project_archive(ns, state):
    identifier = _identifier(ns, "project")
    client = state.client()
    project_id = _resolve_project_identifier(client, identifier, ns.force_id)
    _project, raw = client.archive_project(project_id)
    mutation_response(state, f"archived {project_id}", raw)


def cmd_project_unarchive(ns, state):
    identifier = _identifier(ns, "project")
    client = state.client()
    project_id = _resolve_project_identifier(client, identifier, ns.force_id)
    _project, raw = client.unarchive_project(project_id)
    mutation_response(state, f"unarchived {project_id}", raw)


def cmd_project_delete(ns, state):
    identifier = _identifier(ns, "project")
    client = state.client()
    project_id = _resolve_project_identifier(client, identifier, ns.force_id)
    confirm_delete(state, "project", identifier, ns.force)
    raw = client.delete_project(project_id)
    mutation_response(state, f"deleted {project_id}", raw)


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def _resolve_label_identifier(client, identifier, force_id):
    if force_id:
        return identifier
    return client.find_label_id(identifier)


def cmd_label_list(ns, state):
    client = state.client()
    if ns.all_pages:
        output_list(state, client.list_labels_all(), format_labels_table, format_labels_plain)
        return
    labels, next_cursor = client.list_labels(_page_params(ns))
    output_list(state, labels, format_labels_table, format_labels_plain, next_cursor, paged=True)


def cmd_label_get(ns, state):
    identifier = _identifier(ns, "label")
    client = state.client()
    label = client.get_label(identifier) if ns.force_id else client.find_label(identifier)
    output_item(state, label, format_label_detail, format_label_plain)


def cmd_label_add(ns, state):
    name = join_args(ns.words)
    if not name:
        raise UsageError("label name required")
    draft = LabelDraft.from_namespace(ns, name=name)
    client = state.client()
    label, raw = client.create_label(draft)
    output_mutation(state, label, raw, format_label_detail, format_label_plain)


def cmd_label_update(ns, state):
    identifier = _identifier(ns, "label")
    draft = LabelDraft.from_namespace(ns)
    if draft.is_empty():
        raise UsageError("no updates specified")
    client = state.client()
    label_id = _resolve_label_identifier(client, identifier, ns.force_id)
    label, raw = client.update_label(label_id, draft)
    output_mutation(state, label, raw, format_label_detail, format_label_plain)


def cmd_label_delete(ns, state):
    identifier = _identifier(ns, "label")
    client = state.client()
    label_id = _resolve_label_identifier(client, identifier, ns.force_id)
    confirm_delete(state, "label", identifier, ns.force)
    raw = client.delete_label(label_id)
    mutation_response(state, f"deleted {label_id}", raw)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _section_scope(ns, client):
    return _resolve_project_id(client, ns.project, ns.project_id)


def _resolve_section_identifier(ns, client, identifier):
    if ns.force_id:
        return identifier
    return client.find_section_id(identifier, _section_scope(ns, client))


def cmd_section_list(ns, state):
    _check_pair(ns.project, ns.project_id, "--project")
    client = state.client()
    params = _page_params(ns, project_id=_section_scope(ns, client))
    if ns.all_pages:
        sections = client.list_sections_all(params)
        output_list(state, sections, format_sections_table, format_sections_plain)
        return
    sections, next_cursor = client.list_sections(params)
    output_list(
        state, sections, format_sections_table, format_sections_plain, next_cursor, paged=True
    )


def cmd_section_get(ns, state):
    identifier = _identifier(ns, "section")
    _check_pair(ns.project, ns.project_id, "--project")
    client = state.client()
    if ns.force_id:
        section = client.get_section(identifier)
    else:
        section = client.find_section(identifier, _section_scope(ns, client))
    output_item(state, section, format_section_detail, format_section_plain)


def cmd_section_add(ns, state):
    name = join_args(ns.words)
    if not name:
        raise UsageError("section name required")
    _check_pair(ns.project, ns.project_id, "--project")
    if not ns.project and not ns.project_id:
        raise UsageError("project required")
    client = state.client()
    draft = SectionDraft(name=name, project_id=_section_scope(ns, client), order=ns.order)
    section, raw = client.create_section(draft)
    output_mutation(state, section, raw, format_section_detail, format_section_plain)


def cmd_section_update(ns, state):
    identifier = _identifier(ns, "section")
    if not ns.name:
        raise UsageError("name required")
    _check_pair(ns.project, ns.project_id, "--project")
    client = state.client()
    section_id = _resolve_section_identifier(ns, client, identifier)
    section, raw = client.update_section(section_id, SectionDraft(name=ns.name))
    output_mutation(state, section, raw, format_section_detail, format_section_plain)


def cmd_section_delete(ns, state):
    identifier = _identifier(ns, "section")
    _check_pair(ns.project, ns.project_id, "--project")
    client = state.client()
    section_id = _resolve_section_identifier(ns, client, identifier)
    confirm_delete(state, "section", identifier, ns.force)
    raw = client.delete_section(section_id)
    mutation_response(state, f"deleted {section_id}", raw)


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


def _check_comment_scope(ns):
    _check_pair(ns.task, ns.task_id, "--task")
    _check_pair(ns.project, ns.project_id, "--project")
    has_task = bool(ns.task or ns.task_id)
    has_project = bool(ns.project or ns.project_id)
    if has_task and has_project:
        raise UsageError("use either task or project, not both")
    if not has_task and not has_project:
        raise UsageError("task or project required")


def _comment_scope(ns, client):
    """Return ("task_id" | "project_id", id). Lookup failures are usage errors."""
    try:
        if ns.task_id:
            return "task_id", ns.task_id
        if ns.task:
            return "task_id", client.find_task_id(ns.task, hint="--task-id")
        if ns.project_id:
            return "project_id", ns.project_id
        return "project_id", client.find_project_id(ns.project, hint="--project-id")
    except ResolutionError as e:
        raise UsageError(str(e)) from e


def _comment_id(ns):
    comment_id = join_args(ns.words)
    if not comment_id:
        raise UsageError("comment ID required")
    return comment_id


def cmd_comment_list(ns, state):
    _check_comment_scope(ns)
    client = state.client()
    key, value = _comment_scope(ns, client)
    params = _page_params(ns, **{key: value})
    if ns.all_pages:
        comments = client.list_comments_all(params)
        output_list(state, comments, format_comments_table, format_comments_plain)
        return
    comments, next_cursor = client.list_comments(params)
    output_list(
        state, comments, format_comments_table, format_comments_plain, next_cursor, paged=True
    )


def cmd_comment_get(ns, state):
    comment_id = _comment_id(ns)
    client = state.client()
    output_item(state, client.get_comment(comment_id), format_comment_detail, format_comment_plain)


def cmd_comment_add(ns, state):
    content = join_args(ns.words)
    if not content:
        raise UsageError("content required")
    if ns.file_name and not ns.file:
        raise UsageError("--file-name requires --file")
    _check_comment_scope(ns)

    client = state.client()
    key, value = _comment_scope(ns, client)
    attachment = None
    if ns.file:
        upload_project = value if key == "project_id" else None
        upload, _raw = client.upload_file(ns.file, project_id=upload_project, file_name=ns.file_name)
        if upload is not None:
            attachment = upload.to_dict()
    draft = CommentDraft(
        content=content,
        attachment=attachment,
        uids_to_notify=tuple(ns.notify) if ns.notify else None,
        **{key: value},
    )
    comment, raw = client.create_comment(draft)
    output_mutation(state, comment, raw, format_comment_detail, format_comment_plain)


def cmd_comment_update(ns, state):
    comment_id = _comment_id(ns)
    if not ns.content:
        raise UsageError("content required")
    client = state.client()
    comment, raw = client.update_comment(comment_id, CommentDraft(content=ns.content))
    output_mutation(state, comment, raw, format_comment_detail, format_comment_plain)


def cmd_comment_delete(ns, state):
    comment_id = _comment_id(ns)
    confirm_delete(state, "comment", comment_id, ns.force)
    client = state.client()
    raw = client.delete_comment(comment_id)
    mutation_response(state, f"deleted {comment_id}", raw)


# ---------------------------------------------------------------------------
# Activity log
# ---------------------------------------------------------------------------


def _flag(value):
    return "true" if value else None


def cmd_activity_list(ns, state):
    if ns.initiator_id and ns.initiator_id_null:
        raise UsageError("cannot use --initiator-id and --initiator-id-null together")
    params = _page_params(
        ns,
        object_type=ns.object_type,
        object_id=ns.object_id,
        parent_project_id=ns.parent_project_id,
        parent_item_id=ns.parent_item_id,
        include_parent_object=_flag(ns.include_parent_object),
        include_child_objects=_flag(ns.include_child_objects),
        initiator_id=ns.initiator_id,
        initiator_id_null=_flag(ns.initiator_id_null),
        event_type=ns.event_type,
        object_event_types=normalize_csv(ns.object_event_types) or None,
        annotate_notes=_flag(ns.annotate_notes),
        annotate_parents=_flag(ns.annotate_parents),
    )
    client = state.client()
    if ns.all_pages:
        events = client.list_activities_all(params)
        output_list(state, events, format_activities_table, format_activities_plain)
        return
    events, next_cursor = client.list_activities(params)
    output_list(
        state, events, format_activities_table, format_activities_plain, next_cursor, paged=True
    )


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------


def cmd_upload_add(ns, state):
    path = join_args(ns.words)
    if not path:
        raise UsageError("file path required")
    _check_pair(ns.project, ns.project_id, "--project")
    client = state.client()
    project_id = _resolve_project_id(client, ns.project, ns.project_id)
    upload, raw = client.upload_file(path, project_id=project_id, file_name=ns.name)
    output_mutation(state, upload, raw, format_upload_detail, format_upload_plain)


def cmd_upload_delete(ns, state):
    file_url = join_args(ns.words)
    if file_url and ns.file_url:
        raise UsageError("file url specified twice")
    file_url = file_url or ns.file_url
    if not file_url:
        raise UsageError("file url required")
    confirm_delete(state, "upload", file_url, ns.force)
    client = state.client()
    raw = client.delete_upload(file_url)
    mutation_response(state, f"deleted {file_url}", raw)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


def cmd_user_info(ns, state):
    client = state.client()
    output_item(state, client.get_user(), format_user_detail, format_user_plain)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


def _prompt_secret(state, prompt):
    """Read a secret without echo on a real terminal, else a plain line."""
    if state.stdin is sys.stdin:
        return getpass.getpass(prompt, stream=state.err)
    print(prompt, end="", file=state.err, flush=True)
    return state.stdin.readline()


def cmd_auth_login(ns, state):
    if state.no_input or not state.is_interactive():
        raise UsageError("login requires TTY (disable --no-input)")
    token = _prompt_secret(state, "Todoist token: ").strip()
    if not token:
        raise UsageError("token required")
    state.config.token = token
    state.save_config()
    status_line(state, "token saved")


def cmd_auth_logout(ns, state):
    state.config.token = ""
    state.save_config()
    status_line(state, "token cleared")


def cmd_auth_status(ns, state):
    token, source = state.token_source()
    if source == "env":
        print(f"token set ({config.TOKEN_ENV})", file=state.out)
    elif source == "config":
        print("token set (config)", file=state.out)
    else:
        print("token missing", file=state.out)
        return 3
    if state.verbose:
        print(f"token: {_mask_token(token)}", file=state.err)
    return 0


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


def _config_key(raw):
    key = raw.lower()
    if key not in config.CONFIG_KEYS:
        raise UsageError(f"unknown key: {key}")
    return key


def cmd_config_get(ns, state):
    if not ns.args:
        raise UsageError("key required")
    key = _config_key(ns.args[0])
    print(state.config.get_value(key), file=state.out)


def cmd_config_set(ns, state):
    if len(ns.args) < 2:
        raise UsageError("key and value required")
    key = ns.args[0].lower()
    if key == "token":
        raise UsageError("set token via 'todi auth login'")
    key = _config_key(key)
    value = " ".join(ns.args[1:])
    if key == "label_cli":
        try:
            state.config.label_cli = config.parse_bool(value)
        except ValueError as e:
            raise UsageError(str(e)) from e
    else:
        setattr(state.config, key, value)
    state.save_config()
    status_line(state, "saved")


def cmd_config_path(ns, state):
    print(state.config_path, file=state.out)


def cmd_config_view(ns, state):
    try:
        with open(state.config_path, encoding="utf-8") as f:
            data = f.read()
    except OSError as e:
        raise ConfigError(f"read config: {e}") from e
    print(data.rstrip("\n"), file=state.out)
