"""
todi-cli — command-line client for the Todoist REST API.
"""

import argparse
import os
import sys
from dataclasses import dataclass, field

from todi_cli import commands, config
from todi_cli.exceptions import CliError, UsageError
from todi_cli.state import State
from todi_cli.usage import GROUP_HELP, HELP_TEXT

TASK_ACTIONS = ("list", "get", "add", "update", "close", "reopen", "delete", "quick")
CRUD_ACTIONS = ("list", "get", "add", "update", "delete")

GROUP_ACTIONS = {
    "task": TASK_ACTIONS,
    "project": (*CRUD_ACTIONS, "archive", "unarchive"),
    "section": CRUD_ACTIONS,
    "label": CRUD_ACTIONS,
    "comment": CRUD_ACTIONS,
    "activity": ("list",),
    "upload": ("add", "delete"),
    "user": ("info", "get"),
    "auth": ("login", "logout", "status"),
    "config": ("get", "set", "path", "view"),
}

# ---------------------------------------------------------------------------
# Global flags
# ---------------------------------------------------------------------------


@dataclass
class GlobalFlags:
    show_help: bool = False
    show_version: bool = False
    json: bool = False
    plain: bool = False
    quiet: bool = False
    verbose: bool = False
    no_input: bool = False
    no_color: bool = False
    label_cli: bool = False
    config_path: str = ""
    api_base: str = ""
    remaining: list = field(default_factory=list)


_BOOL_FLAGS = {
    "--version": "show_version",
    "--json": "json",
    "--plain": "plain",
    "--quiet": "quiet",
    "-q": "quiet",
    "--verbose": "verbose",
    "-v": "verbose",
    "--no-input": "no_input",
    "--no-color": "no_color",
    "--label-cli": "label_cli",
}
_VALUE_FLAGS = {"--config": "config_path", "--api-base": "api_base"}


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Scanning stops at a literal ``--``, which is dropped when it comes before
    the command name. -h/--help only counts as global
    before the command name; after it, it is left for the command parser.
    """
    flags = GlobalFlags()
    remaining = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            remaining.extend(argv[i + 1 :] if not remaining else argv[i:])
            break
        name, has_value, inline_value = arg.partition("=")
        if arg in _BOOL_FLAGS:
            setattr(flags, _BOOL_FLAGS[arg], True)
        elif name in _VALUE_FLAGS:
            if has_value:
                value = inline_value
            elif i + 1 < len(argv):
                i += 1
                value = argv[i]
            else:
                raise UsageError(f"flag needs an argument: {name}")
            setattr(flags, _VALUE_FLAGS[name], value)
        elif arg in ("-h", "--help") and not remaining:
            flags.show_help = True
        else:
            remaining.append(arg)
        i += 1
    flags.remaining = remaining
    return flags


def _output_mode(use_json, use_plain):
    if use_json and use_plain:
        raise UsageError("cannot use --json and --plain together")
    if use_json:
        return config.MODE_JSON
    if use_plain:
        return config.MODE_PLAIN
    return config.MODE_HUMAN


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Parser that raises UsageError instead of printing argparse usage."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("add_help", False)
        kwargs.setdefault("allow_abbrev", False)
        super().__init__(*args, **kwargs)

    def error(self, message):
        raise UsageError(message)


def _integer(value):
    try:
        return int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc


def _bounded_int(low, high):
    def _parse(value):
        parsed = _integer(value)
        if not low <= parsed <= high:
            raise argparse.ArgumentTypeError(f"must be between {low} and {high}")
        return parsed

    return _parse


def _action(actions, name, func, **kwargs):
    p = actions.add_parser(name, **kwargs)
    p.add_argument("--help", "-h", action="store_true", dest="action_help")
    p.set_defaults(func=func)
    return p


def _add_words(p, metavar):
    p.add_argument("words", nargs="*", metavar=metavar)


def _add_paging(p, default_limit=config.DEFAULT_LIST_LIMIT, max_limit=config.PAGE_LIMIT):
    p.add_argument("--limit", type=_bounded_int(1, max_limit), default=default_limit)
    p.add_argument("--cursor")
    p.add_argument("--all", action="store_true", dest="all_pages")


def _add_id_flag(p):
    p.add_argument("--id", action="store_true", dest="force_id")


def _add_force(p):
    p.add_argument("--force", action="store_true")


def _add_project_scope(p):
    p.add_argument("--project")
    p.add_argument("--project-id", dest="project_id")


def _add_favorite(p, allow_unset=True):
    p.add_argument("--favorite", action="store_true")
    if allow_unset:
        p.add_argument("--unfavorite", action="store_true")


def _add_task_fields(p):
    p.add_argument("--description")
    p.add_argument("--label", action="append")
    p.add_argument("--labels")
    p.add_argument("--priority", type=_integer)
    p.add_argument("--assignee")
    p.add_argument("--due")
    p.add_argument("--due-date", dest="due_date")
    p.add_argument("--due-datetime", dest="due_datetime")
    p.add_argument("--due-lang", dest="due_lang")
    p.add_argument("--duration", type=_integer)
    p.add_argument("--duration-unit", dest="duration_unit")
    p.add_argument("--deadline-date", dest="deadline_date")


def _group(groups, name):
    g = groups.add_parser(name)
    g.add_argument("--help", "-h", action="store_true", dest="group_help")
    return g.add_subparsers(dest="action", parser_class=_SubcommandParser)


def _build_task(groups):
    actions = _group(groups, "task")

    p = _action(actions, "list", commands.cmd_task_list)
    _add_words(p, "project")
    p.add_argument("--project")
    p.add_argument("--label")
    _add_paging(p)

    p = _action(actions, "get", commands.cmd_task_get)
    _add_words(p, "task")
    _add_id_flag(p)

    p = _action(actions, "add", commands.cmd_task_add)
    _add_words(p, "content")
    _add_project_scope(p)
    p.add_argument("--section")
    p.add_argument("--section-id", dest="section_id")
    _add_task_fields(p)

    p = _action(actions, "update", commands.cmd_task_update)
    _add_words(p, "task")
    _add_id_flag(p)
    p.add_argument("--content", dest="new_content")
    _add_task_fields(p)

    for name, func in (
        ("close", commands.cmd_task_close),
        ("reopen", commands.cmd_task_reopen),
        ("delete", commands.cmd_task_delete),
    ):
        p = _action(actions, name, func)
        _add_words(p, "task")
        _add_id_flag(p)
        p.set_defaults(force=False)
        if name == "delete":
            _add_force(p)

    p = _action(actions, "quick", commands.cmd_task_quick)
    _add_words(p, "text")
    p.add_argument("--note")
    p.add_argument("--reminder")
    p.add_argument("--auto-reminder", action="store_true", dest="auto_reminder")
    p.add_argument("--meta", action="store_true")


def _build_project(groups):
    actions = _group(groups, "project")

    p = _action(actions, "list", commands.cmd_project_list)
    _add_paging(p)

    p = _action(actions, "get", commands.cmd_project_get)
    _add_words(p, "project")
    _add_id_flag(p)

    p = _action(actions, "add", commands.cmd_project_add)
    _add_words(p, "name")
    p.add_argument("--parent")
    p.add_argument("--parent-id", dest="parent_id")
    p.add_argument("--color")
    _add_favorite(p, allow_unset=False)
    p.add_argument("--view")

    p = _action(actions, "update", commands.cmd_project_update)
    _add_words(p, "project")
    _add_id_flag(p)
    p.add_argument("--name")
    p.add_argument("--color")
    _add_favorite(p)
    p.add_argument("--view")

    for name, func in (
        ("archive", commands.cmd_project_archive),
        ("unarchive", commands.cmd_project_unarchive),
    ):
        p = _action(actions, name, func)
        _add_words(p, "project")
        _add_id_flag(p)

    p = _action(actions, "delete", commands.cmd_project_delete)
    _add_words(p, "project")
    _add_id_flag(p)
    _add_force(p)


def _build_label(groups):
    actions = _group(groups, "label")

    p = _action(actions, "list", commands.cmd_label_list)
    _add_paging(p)

    p = _action(actions, "get", commands.cmd_label_get)
    _add_words(p, "label")
    _add_id_flag(p)

    p = _action(actions, "add", commands.cmd_label_add)
    _add_words(p, "name")
    p.add_argument("--color")
    p.add_argument("--order", type=_integer)
    _add_favorite(p, allow_unset=False)

    p = _action(actions, "update", commands.cmd_label_update)
    _add_words(p, "label")
    _add_id_flag(p)
    p.add_argument("--name")
    p.add_argument("--color")
    p.add_argument("--order", type=_integer)
    _add_favorite(p)

    p = _action(actions, "delete", commands.cmd_label_delete)
    _add_words(p, "label")
    _add_id_flag(p)
    _add_force(p)


def _build_section(groups):
    actions = _group(groups, "section")

    p = _action(actions, "list", commands.cmd_section_list)
    _add_project_scope(p)
    _add_paging(p)

    p = _action(actions, "get", commands.cmd_section_get)
    _add_words(p, "section")
    _add_id_flag(p)
    _add_project_scope(p)

    p = _action(actions, "add", commands.cmd_section_add)
    _add_words(p, "name")
    _add_project_scope(p)
    p.add_argument("--order", type=_integer)

    p = _action(actions, "update", commands.cmd_section_update)
    _add_words(p, "section")
    _add_id_flag(p)
    _add_project_scope(p)
    p.add_argument("--name")

    p = _action(actions, "delete", commands.cmd_section_delete)
    _add_words(p, "section")
    _add_id_flag(p)
    _add_project_scope(p)
    _add_force(p)


def _add_comment_scope(p):
    p.add_argument("--task")
    p.add_argument("--task-id", dest="task_id")
    _add_project_scope(p)


def _build_comment(groups):
    actions = _group(groups, "comment")

    p = _action(actions, "list", commands.cmd_comment_list)
    _add_comment_scope(p)
    _add_paging(p)

    p = _action(actions, "get", commands.cmd_comment_get)
    _add_words(p, "comment_id")

    p = _action(actions, "add", commands.cmd_comment_add)
    _add_words(p, "content")
    _add_comment_scope(p)
    p.add_argument("--notify", type=_integer, action="append")
    p.add_argument("--file")
    p.add_argument("--file-name", dest="file_name")

    p = _action(actions, "update", commands.cmd_comment_update)
    _add_words(p, "comment_id")
    p.add_argument("--content")

    p = _action(actions, "delete", commands.cmd_comment_delete)
    _add_words(p, "comment_id")
    _add_force(p)


def _build_activity(groups):
    actions = _group(groups, "activity")
    p = _action(actions, "list", commands.cmd_activity_list)
    _add_paging(p, config.DEFAULT_ACTIVITY_LIMIT, config.ACTIVITY_PAGE_LIMIT)
    p.add_argument("--object-type", dest="object_type")
    p.add_argument("--object-id", dest="object_id")
    p.add_argument("--parent-project-id", dest="parent_project_id")
    p.add_argument("--parent-item-id", dest="parent_item_id")
    p.add_argument("--include-parent-object", action="store_true", dest="include_parent_object")
    p.add_argument("--include-child-objects", action="store_true", dest="include_child_objects")
    p.add_argument("--initiator-id", dest="initiator_id")
    p.add_argument("--initiator-id-null", action="store_true", dest="initiator_id_null")
    p.add_argument("--event-type", dest="event_type")
    p.add_argument("--object-event-types", dest="object_event_types")
    p.add_argument("--annotate-notes", action="store_true", dest="annotate_notes")
    p.add_argument("--annotate-parents", action="store_true", dest="annotate_parents")


def _build_upload(groups):
    actions = _group(groups, "upload")

    p = _action(actions, "add", commands.cmd_upload_add)
    _add_words(p, "path")
    _add_project_scope(p)
    p.add_argument("--name")

    p = _action(actions, "delete", commands.cmd_upload_delete)
    _add_words(p, "file_url")
    p.add_argument("--file-url", dest="file_url")
    _add_force(p)


def _build_user(groups):
    actions = _group(groups, "user")
    _action(actions, "info", commands.cmd_user_info, aliases=["get"])


def _build_auth(groups):
    actions = _group(groups, "auth")
    _action(actions, "login", commands.cmd_auth_login)
    _action(actions, "logout", commands.cmd_auth_logout)
    _action(actions, "status", commands.cmd_auth_status)


def _build_config(groups):
    actions = _group(groups, "config")
    for name, func in (
        ("get", commands.cmd_config_get),
        ("set", commands.cmd_config_set),
        ("path", commands.cmd_config_path),
        ("view", commands.cmd_config_view),
    ):
        p = _action(actions, name, func)
        p.add_argument("args", nargs="*")


def build_parser():
    parser = _SubcommandParser(prog="todi", description="Todoist from the terminal")
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    groups = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)
    _build_task(groups)
    _build_project(groups)
    _build_section(groups)
    _build_label(groups)
    _build_comment(groups)
    _build_activity(groups)
    _build_upload(groups)
    _build_user(groups)
    _build_auth(groups)
    _build_config(groups)
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


def _load_state(flags, mode, out, err, stdin):
    config_path = flags.config_path or config.default_config_path()
    cfg = config.Config.load(config_path)
    api_base = (
        flags.api_base
        or cfg.api_base
        or os.environ.get(config.API_BASE_ENV)
        or config.DEFAULT_API_BASE
    )
    return State(
        out=out,
        err=err,
        stdin=stdin,
        mode=mode,
        quiet=flags.quiet,
        verbose=flags.verbose,
        no_input=flags.no_input,
        no_color=flags.no_color,
        config=cfg,
        config_path=config_path,
        api_base=api_base,
        label_cli=flags.label_cli or cfg.label_cli,
    )


def _dispatch(argv, out, err, stdin):
    flags = _extract_global_flags(argv)
    if flags.show_version:
        print(f"todi {config.VERSION}", file=out)
        return 0
    rest = flags.remaining
    if flags.show_help or not rest:
        print(HELP_TEXT, end="", file=out)
        return 0 if flags.show_help else 2

    head = rest[0]
    if head == "help":
        print(HELP_TEXT, end="", file=out)
        return 0
    if head not in GROUP_ACTIONS:
        if head not in TASK_ACTIONS:
            print(f"error: unknown command: {head}", file=err)
            print(HELP_TEXT, end="", file=err)
            return 2
        rest = ["task", *rest]
        head = "task"

    group_help = GROUP_HELP[head]
    action = rest[1] if len(rest) > 1 else None
    if action is None:
        print(group_help, end="", file=out)
        return 2
    if action == "help":
        print(group_help, end="", file=out)
        return 0
    if not action.startswith("-") and action not in GROUP_ACTIONS[head]:
        print(f"error: unknown {head} command: {action}", file=err)
        print(group_help, end="", file=err)
        return 2

    ns = build_parser().parse_args(rest)
    if getattr(ns, "group_help", False) or getattr(ns, "action_help", False):
        print(group_help, end="", file=out)
        return 0
    if not getattr(ns, "func", None):
        print(group_help, end="", file=out)
        return 2

    mode = _output_mode(flags.json, flags.plain)
    state = _load_state(flags, mode, out, err, stdin)
    code = ns.func(ns, state)
    return code or 0


def run(argv=None, out=None, err=None, stdin=None):
    """Run one CLI invocation and return its exit code."""
    out = out or sys.stdout
    err = err or sys.stderr
    stdin = stdin or sys.stdin
    if argv is None:
        argv = sys.argv[1:]
    try:
        return _dispatch(argv, out, err, stdin)
    except CliError as e:
        print(f"error: {e}", file=err)
        return e.exit_code


def main():
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
