"""Public entry points composing parse -> match -> build.

Every call is a full, independent pass over the inputs. Nothing here raises
for bad rule text or log text; problems degrade to less output.
"""

from __future__ import annotations

from .config import DiagramConfig
from .diagram import build_diagram, collect_participants
from .matching import match_compiled
from .matching import matched_line_indices as _matched_line_indices
from .models import DiagramReport, InvalidRule
from .rules import compile_rules, parse_rules


def generate_diagram(
    rule_text: str,
    log_text: str,
    *,
    include_line_annotations: bool = True,
) -> str:
    """Return Mermaid text for the log, or ``""`` when nothing matched."""
    rules = parse_rules(rule_text)
    if not rules or not log_text.strip():
        return ""

    events = match_compiled(compile_rules(rules), log_text)
    return build_diagram(events, include_line_annotations=include_line_annotations)


def matched_line_indices(rule_text: str, log_text: str) -> set[int]:
    """Original 0-based indices of log lines matching at least one rule."""
    return _matched_line_indices(parse_rules(rule_text), log_text)


def build_report(
    rule_text: str,
    log_text: str,
    *,
    config: DiagramConfig | None = None,
) -> DiagramReport:
    """Diagram plus the details a caller needs to explain it."""
    cfg = config if config is not None else DiagramConfig()
    compiled = compile_rules(parse_rules(rule_text))
    invalid = [
        InvalidRule(index=c.index, title=c.rule.title, match=c.rule.match, error=c.error)
        for c in compiled
        if c.error is not None
    ]

    events = match_compiled(compiled, log_text) if log_text.strip() else []
    return DiagramReport(
        diagram=build_diagram(events, include_line_annotations=cfg.include_line_annotations),
        participants=collect_participants(events),
        event_count=len(events),
        matched_lines=sorted({e.line_no for e in events}),
        invalid_rules=invalid,
    )
