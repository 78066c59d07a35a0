"""Log-to-sequence-diagram engine."""

from __future__ import annotations

from .diagram import build_diagram, collect_participants
from .matching import highlight_lines, match_lines, split_log_lines
from .models import CompiledRule, DiagramReport, LogLine, MatchEvent, Rule
from .rules import (
    append_rule,
    compile_rules,
    format_rules,
    parse_rules,
    remove_rule,
    update_rule,
)
from .service import build_report, generate_diagram, matched_line_indices

__all__ = [
    "CompiledRule",
    "DiagramReport",
    "LogLine",
    "MatchEvent",
    "Rule",
    "append_rule",
    "build_diagram",
    "build_report",
    "collect_participants",
    "compile_rules",
    "format_rules",
    "generate_diagram",
    "highlight_lines",
    "match_lines",
    "matched_line_indices",
    "parse_rules",
    "remove_rule",
    "split_log_lines",
    "update_rule",
]
