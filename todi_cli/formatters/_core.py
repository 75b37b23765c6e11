"""Core output dispatchers: pick JSON, plain, or human rendering per state.mode."""

import json

from todi_cli import config


def _emit(state, text):
    print(text, file=state.out)


def pretty_print(state, data):
    _emit(state, json.dumps(data, indent=2, ensure_ascii=False))


def output_raw(state, raw):
    """Echo a server response body verbatim (trimmed), or ``null`` when empty."""
    text = raw.decode("utf-8", errors="replace").strip() if raw else ""
    _emit(state, text or "null")


def output_list(state, items, formatter, plain_formatter, next_cursor=None, paged=False):
    """Render a collection.

    In JSON mode the payload is ``{"results": [...]}``; single-page listings
    (paged=True) also carry ``next_cursor``.
    """
    if state.mode == config.MODE_JSON:
        payload = {"results": [item.to_dict() for item in items]}
        if paged:
            payload["next_cursor"] = next_cursor or ""
        pretty_print(state, payload)
    elif state.mode == config.MODE_PLAIN:
        if items:
            _emit(state, plain_formatter(items))
    else:
        _emit(state, formatter(items, next_cursor=next_cursor if paged else None))


def output_item(state, item, formatter, plain_formatter):
    if state.mode == config.MODE_JSON:
        pretty_print(state, item.to_dict())
    elif state.mode == config.MODE_PLAIN:
        _emit(state, plain_formatter(item))
    else:
        _emit(state, formatter(item))


def _identity(entity):
    return getattr(entity, "id", None) or getattr(entity, "file_url", None)


def output_mutation(state, entity, raw, formatter, plain_formatter):
    """Render the result of a create/update call.

    JSON mode echoes the raw body. Otherwise the decoded entity is shown, or
    ``ok`` when the server returned nothing identifiable.
    """
    if state.mode == config.MODE_JSON:
        output_raw(state, raw)
    elif entity is None or not _identity(entity):
        _emit(state, "ok")
    else:
        output_item(state, entity, formatter, plain_formatter)


def mutation_response(state, message, raw=None):
    """Print a one-line confirmation (``deleted 123``). Suppressed by --quiet.
    In JSON mode the raw response body is echoed instead."""
    if state.mode == config.MODE_JSON:
        output_raw(state, raw)
        return
    if state.quiet:
        return
    _emit(state, message)


def status_line(state, message):
    """Print a confirmation that is not tied to an API response. Suppressed by --quiet."""
    if not state.quiet:
        _emit(state, message)
