"""Rendering helpers for changeset consumers."""

from changepack.reporting.formatting import (
    MISSING,
    ChangeLine,
    changeset_to_dict,
    escape_json_pointer,
    flatten_changes,
    render_changes,
    render_changeset_summary,
    summarize_changeset,
)

__all__ = [
    "MISSING",
    "ChangeLine",
    "changeset_to_dict",
    "escape_json_pointer",
    "flatten_changes",
    "render_changes",
    "render_changeset_summary",
    "summarize_changeset",
]
