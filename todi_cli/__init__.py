"""todi-cli — command-line client for the Todoist REST API."""

from todi_cli.client import TodoistClient
from todi_cli.config import VERSION
from todi_cli.exceptions import (
    ApiError,
    CliError,
    NotFoundError,
    NotUniqueError,
    ResolutionError,
    UsageError,
)
from todi_cli.models import (
    Activity,
    Comment,
    Label,
    Project,
    Section,
    Task,
    Upload,
    User,
)

__all__ = [
    "VERSION",
    "TodoistClient",
    "ApiError",
    "CliError",
    "NotFoundError",
    "NotUniqueError",
    "ResolutionError",
    "UsageError",
    "Activity",
    "Comment",
    "Label",
    "Project",
    "Section",
    "Task",
    "Upload",
    "User",
]
