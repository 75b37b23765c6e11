"""Low-level table rendering helpers (stdlib only)."""

import re

_CONTROL_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_LINEBREAK_RE = re.compile(r"[\r\n\t]+")

COLUMN_GAP = "  "


def _trunc(s, maxlen):
    """Truncate string with ellipsis indicator."""
    if not s:
        return ""
    return s[: maxlen - 1] + "…" if len(s) > maxlen else s


def _sanitize_str(s):
    """Strip ANSI escape sequences and control chars from output.
    Preserves newlines (\\n) and tabs (\\t)."""
    if not s:
        return s
    return _CONTROL_RE.sub("", str(s))


def _cell(value):
    """Render one table cell on a single line."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return _LINEBREAK_RE.sub(" ", _sanitize_str(str(value)))


def _table(columns, rows, footer=None):
    """Build an aligned table string.
    columns: list of header names. Widths fit the widest cell per column;
    the last column is not padded.
    rows: list of tuples matching columns.
    footer: optional footer line, separated by a blank line."""
    cells = [[_cell(v) for v in row] for row in rows]
    widths = [len(name) for name in columns]
    for row in cells:
        for i, val in enumerate(row):
            widths[i] = max(widths[i], len(val))

    def _line(values):
        parts = []
        for i, val in enumerate(values):
            if i == len(columns) - 1:
                parts.append(val)
            else:
                parts.append(f"{val:<{widths[i]}}")
        return COLUMN_GAP.join(parts).rstrip()

    header = _line(columns)
    lines = [header, "-" * len(header)]
    lines.extend(_line(row) for row in cells)
    if footer:
        lines.append(f"\n{footer}")
    return "\n".join(lines)


def _plain_rows(rows):
    """Tab-delimited rows for scripting. No header."""
    return "\n".join("\t".join(_cell(v) for v in row) for row in rows)


def _detail(pairs):
    """Render ``Key: value`` lines, skipping pairs whose value is None."""
    return "\n".join(f"{key}: {_cell(val)}" for key, val in pairs if val is not None)
