"""
Shared pure-utility functions for todi-cli.

These helpers have no business logic and no side effects.
"""


def _get_field(d, snake, alt):
    """Get a value from a dict trying the primary key, then a fallback key."""
    if snake in d:
        return d.get(snake)
    return d.get(alt)


def join_args(args):
    """Join positional words into one identifier, trimming outer whitespace."""
    return " ".join(args or []).strip()


def split_csv(raw):
    """Split a comma-separated value, dropping blanks."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def normalize_csv(raw):
    """Re-join a comma-separated value without blanks or surrounding spaces."""
    return ",".join(split_csv(raw))


def append_unique_label(labels, label):
    if label in labels:
        return list(labels)
    return [*labels, label]


def merge_labels(labels, labels_csv):
    """Combine repeated --label values with a --labels CSV.

    --label values are kept verbatim; CSV entries are trimmed and only
    added when not already present.
    """
    combined = list(labels or [])
    for label in split_csv(labels_csv):
        combined = append_unique_label(combined, label)
    return combined


def ensure_quick_add_label(text, label):
    """Append ``#label`` to quick-add text unless already there (case-insensitive)."""
    if f"#{label.lower()}" in text.lower():
        return text
    return f"{text.strip()} #{label}"
