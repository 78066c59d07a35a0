"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from dataclasses import asdict, replace
from typing import Any, Literal

from mcp_log_sequence_server.core.config import resolve_diagram_config
from mcp_log_sequence_server.core.loading import read_inputs
from mcp_log_sequence_server.core.matching import highlight_lines
from mcp_log_sequence_server.core.models import RULE_FIELDS, Rule
from mcp_log_sequence_server.core.rules import (
    append_rule,
    parse_rules,
    remove_rule,
    update_rule,
)
from mcp_log_sequence_server.core.service import build_report

EditAction = Literal["append", "remove", "update"]


def generate_sequence_diagram_impl(
    *,
    rule_text: str,
    log_text: str,
    include_line_annotations: bool | None = None,
) -> dict[str, Any]:
    """Implementation for the `generate_sequence_diagram` MCP tool."""
    cfg = resolve_diagram_config()
    if include_line_annotations is not None:
        cfg = replace(cfg, include_line_annotations=include_line_annotations)
    return build_report(rule_text, log_text, config=cfg).model_dump()


async def generate_sequence_diagram_from_files_impl(
    *,
    rules_path: str,
    log_path: str,
    include_line_annotations: bool | None = None,
) -> dict[str, Any]:
    """Implementation for the `generate_sequence_diagram_from_files` MCP tool."""
    cfg = resolve_diagram_config()
    rule_text, log_text = await read_inputs(rules_path, log_path, max_bytes=cfg.max_file_bytes)
    out = generate_sequence_diagram_impl(
        rule_text=rule_text,
        log_text=log_text,
        include_line_annotations=include_line_annotations,
    )
    out["rules_path"] = rules_path
    out["log_path"] = log_path
    return out


def parse_rule_table_impl(*, rule_text: str) -> dict[str, Any]:
    """Implementation for the `parse_rule_table` MCP tool."""
    rules = parse_rules(rule_text)
    return {
        "count": len(rules),
        "rules": [asdict(r) for r in rules],
    }


def highlight_log_impl(*, rule_text: str, log_text: str) -> dict[str, Any]:
    """Implementation for the `highlight_log` MCP tool."""
    lines = highlight_lines(parse_rules(rule_text), log_text)
    return {
        "matched_count": sum(1 for line in lines if line.matched),
        "lines": [asdict(line) for line in lines],
    }


def edit_rule_table_impl(
    *,
    rule_text: str,
    action: EditAction,
    index: int | None = None,
    field: str | None = None,
    value: str = "",
    title: str = "",
    match: str = "",
    src: str = "",
    dst: str = "",
) -> dict[str, Any]:
    """Implementation for the `edit_rule_table` MCP tool.

    Notes
    -----
    - append: adds a row built from title/match/src/dst (all may be empty)
    - remove: drops the row at ``index``
    - update: sets ``field`` of the row at ``index`` to ``value``
    """
    if action == "append":
        new_text = append_rule(rule_text, Rule(title=title, match=match, src=src, dst=dst))
    elif action == "remove":
        if index is None:
            raise ValueError("index is required for action 'remove'.")
        new_text = remove_rule(rule_text, index)
    elif action == "update":
        if index is None or field is None:
            raise ValueError("index and field are required for action 'update'.")
        if field not in RULE_FIELDS:
            valid = ", ".join(RULE_FIELDS)
            raise ValueError(f"Unknown rule field '{field}'. Valid values: {valid}.")
        new_text = update_rule(rule_text, index, field, value)
    else:
        raise ValueError(f"Unknown action '{action}'. Valid values: append, remove, update.")

    return {
        "rule_text": new_text,
        "count": len(parse_rules(new_text)),
    }
