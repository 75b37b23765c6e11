"""Help text for the top-level command and each command group."""

HELP_TEXT = """\
todi - Todoist from the terminal

Usage:
  todi [global flags] <task-command> [args]
  todi [global flags] <command> <action> [args]

Commands:
  task      Manage tasks (list, get, add, update, close, reopen, delete, quick)
  project   Manage projects
  section   Manage sections
  label     Manage labels
  comment   Manage comments
  activity  Browse the activity log
  upload    Upload or delete files
  user      Show the current user
  auth      Store or clear the API token
  config    Read or change config values

Global flags:
  -h, --help          Show help
  --version           Show version
  --json              JSON output
  --plain             Tab-delimited output for scripts
  -q, --quiet         Suppress confirmations
  -v, --verbose       Log each HTTP request to stderr
  --no-input          Never prompt; destructive commands need --force
  --no-color          Disable color
  --config <path>     Config file path
  --api-base <url>    API base URL (default https://api.todoist.com)
  --label-cli         Add label 'cli' to created tasks

Auth:
  todi auth login     Save a token to the config file
  TODOIST_TOKEN       Overrides the token stored in config

Notes:
  Task commands work without the "task" prefix (todi list, todi add ...).
  <task>, <project>, <label> and <section> accept an exact name unless --id is set.
  Destructive commands ask for confirmation on a TTY, or need --force.
"""

TASK_HELP = """\
todi task - task commands

Usage:
  todi list [project]
  todi get <task>
  todi add <content>
  todi update <task>
  todi close <task>
  todi reopen <task>
  todi delete <task>
  todi quick <text>

list:
  --project <name>         Project name (exact match)
  --label <name>           Filter by label
  --limit <n>              Tasks per page (1-200, default 50)
  --cursor <cursor>        Start from this page cursor
  --all                    Fetch every page

get / close / reopen / delete:
  --id                     Treat the argument as a task ID
  --force                  Skip confirmation (delete)

add / update:
  --content <text>         New content (update only)
  --description <text>     Description
  --project <name>         Project name (add only)
  --project-id <id>        Project ID (add only)
  --section <name>         Section name (add only)
  --section-id <id>        Section ID (add only)
  --label <name>           Label (repeatable)
  --labels <a,b>           Labels, comma-separated
  --priority <1-4>         Priority (4 is most urgent)
  --assignee <id>          Assignee user ID
  --due <text>             Natural-language due string
  --due-date <YYYY-MM-DD>  Due date
  --due-datetime <RFC3339> Due date and time
  --due-lang <code>        Language of --due
  --duration <n>           Duration amount
  --duration-unit <unit>   minute or day
  --deadline-date <date>   Deadline (YYYY-MM-DD)

quick:
  --note <text>            Attach a note
  --reminder <text>        Reminder
  --auto-reminder          Add the default reminder
  --meta                   Return parsing metadata

Examples:
  todi list "Inbox" --all
  todi add "Write docs" --project "Docs" --priority 3
  todi update "Write docs" --due tomorrow
  todi close "Write docs"
"""

PROJECT_HELP = """\
todi project - project commands

Usage:
  todi project list
  todi project get <project>
  todi project add <name>
  todi project update <project>
  todi project archive <project>
  todi project unarchive <project>
  todi project delete <project>

list:
  --limit <n> / --cursor <cursor> / --all

get / update / archive / unarchive / delete:
  --id                     Treat the argument as a project ID
  --force                  Skip confirmation (delete)

add:
  --parent <name>          Parent project name
  --parent-id <id>         Parent project ID
  --color <name>           Color
  --favorite               Mark as favorite
  --view <list|board>      View style

update:
  --name <name>            New name
  --color <name>           New color
  --favorite / --unfavorite
  --view <list|board>      View style
"""

SECTION_HELP = """\
todi section - section commands

Usage:
  todi section list [--project <name>]
  todi section get <section>
  todi section add <name> --project <name>
  todi section update <section> --name <name>
  todi section delete <section>

Flags:
  --project <name>         Project name, scopes name lookups
  --project-id <id>        Project ID, scopes name lookups
  --id                     Treat the argument as a section ID
  --order <n>              Position (add)
  --name <name>            New name (update)
  --force                  Skip confirmation (delete)
  --limit <n> / --cursor <cursor> / --all
"""

LABEL_HELP = """\
todi label - label commands

Usage:
  todi label list
  todi label get <label>
  todi label add <name>
  todi label update <label>
  todi label delete <label>

Flags:
  --id                     Treat the argument as a label ID
  --name <name>            New name (update)
  --color <name>           Color
  --order <n>              Position
  --favorite / --unfavorite
  --force                  Skip confirmation (delete)
  --limit <n> / --cursor <cursor> / --all
"""

COMMENT_HELP = """\
todi comment - comment commands

Usage:
  todi comment list (--task <title> | --task-id <id> | --project <name> | --project-id <id>)
  todi comment get <comment_id>
  todi comment add <content> (--task ... | --project ...)
  todi comment update <comment_id> --content <text>
  todi comment delete <comment_id>

add:
  --notify <uid>           User ID to notify (repeatable)
  --file <path>            Upload and attach a file
  --file-name <name>       Override the uploaded file name

Other flags:
  --content <text>         New content (update)
  --force                  Skip confirmation (delete)
  --limit <n> / --cursor <cursor> / --all
"""

ACTIVITY_HELP = """\
todi activity - activity log

Usage:
  todi activity list

Flags:
  --limit <n>                  Events per page (1-100, default 30)
  --cursor <cursor>            Start from this page cursor
  --all                        Fetch every page
  --object-type <type>         item, note, project ...
  --object-id <id>
  --parent-project-id <id>
  --parent-item-id <id>
  --include-parent-object
  --include-child-objects
  --initiator-id <id>
  --initiator-id-null          Only events without an initiator
  --event-type <type>          added, updated, completed ...
  --object-event-types <a,b>   e.g. item:added,note:
  --annotate-notes
  --annotate-parents
"""

UPLOAD_HELP = """\
todi upload - upload commands

Usage:
  todi upload add <path> [--project <name> | --project-id <id>] [--name <name>]
  todi upload delete <file_url> [--force]
  todi upload delete --file-url <url> [--force]
"""

USER_HELP = """\
todi user - user commands

Usage:
  todi user info

Output:
  id, email, full_name
"""

AUTH_HELP = """\
todi auth - token commands

Usage:
  todi auth login      Prompt for a token and save it (TTY required)
  todi auth logout     Remove the saved token
  todi auth status     Report where the token comes from (exit 3 if missing)
"""

CONFIG_HELP = """\
todi config - config commands

Usage:
  todi config get <key>
  todi config set <key> <value>
  todi config path
  todi config view

Keys:
  token              Saved token (set it with 'todi auth login')
  api_base           API base URL
  default_project    Project used by 'add' when none is given
  default_labels     Labels used by 'add' when none are given (comma-separated)
  label_cli          Add label 'cli' to created tasks (true/false)
"""

GROUP_HELP = {
    "task": TASK_HELP,
    "project": PROJECT_HELP,
    "section": SECTION_HELP,
    "label": LABEL_HELP,
    "comment": COMMENT_HELP,
    "activity": ACTIVITY_HELP,
    "upload": UPLOAD_HELP,
    "user": USER_HELP,
    "auth": AUTH_HELP,
    "config": CONFIG_HELP,
}
