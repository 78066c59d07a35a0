"""Mermaid sequence diagram emission."""

from __future__ import annotations

from collections.abc import Sequence

from .models import MatchEvent

INDENT = "    "


def collect_participants(events: Sequence[MatchEvent]) -> list[str]:
    """Distinct src/dst names in first-seen order (src before dst per event)."""
    seen: dict[str, None] = {}
    for e in events:
        seen.setdefault(e.src, None)
        seen.setdefault(e.dst, None)
    return list(seen)


def format_annotation(event: MatchEvent) -> str:
    return f"L{event.line_index + 1} : {event.line_text}"


def build_diagram(events: Sequence[MatchEvent], *, include_line_annotations: bool = True) -> str:
    """Render events as ``sequenceDiagram`` text; empty string when no events."""
    if not events:
        return ""

    lines = ["sequenceDiagram"]
    for p in collect_participants(events):
        lines.append(f"{INDENT}participant {p}")

    for e in events:
        lines.append(f"{INDENT}{e.src}->>{e.dst}: {e.title}")
        if include_line_annotations:
            lines.append(f"{INDENT}Note over {e.src},{e.dst}: {format_annotation(e)}")

    return "\n".join(lines) + "\n"
