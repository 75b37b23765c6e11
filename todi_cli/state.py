"""
Per-invocation runtime state handed to every command handler.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import TextIO

from todi_cli.client import TodoistClient
from todi_cli.config import DEFAULT_API_BASE, MODE_HUMAN, MODE_JSON, TOKEN_ENV, Config
from todi_cli.exceptions import AuthError


@dataclass
class State:
    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)
    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    mode: str = MODE_HUMAN
    quiet: bool = False
    verbose: bool = False
    no_input: bool = False
    no_color: bool = False
    config: Config = field(default_factory=Config)
    config_path: str = ""
    api_base: str = DEFAULT_API_BASE
    label_cli: bool = False

    @property
    def json(self) -> bool:
        return self.mode == MODE_JSON

    def token_source(self) -> tuple[str, str]:
        """Return (token, source). Source is "env", "config" or ""."""
        env_token = os.environ.get(TOKEN_ENV, "")
        if env_token:
            return env_token, "env"
        if self.config.token:
            return self.config.token, "config"
        return "", ""

    def client(self) -> TodoistClient:
        token, _source = self.token_source()
        if not token:
            raise AuthError(
                f"missing Todoist token: run 'todi auth login' or set {TOKEN_ENV}"
            )
        return TodoistClient(
            token,
            base_url=self.api_base,
            verbose=self.verbose,
            err=self.err,
        )

    def is_interactive(self) -> bool:
        isatty = getattr(self.stdin, "isatty", None)
        try:
            return bool(isatty and isatty())
        except (OSError, ValueError):
            return False

    def save_config(self) -> None:
        self.config.save(self.config_path)
