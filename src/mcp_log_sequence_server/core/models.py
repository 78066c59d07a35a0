"""Core data models for log-to-sequence generation."""

from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import BaseModel, Field

RULE_FIELDS: tuple[str, ...] = ("title", "match", "src", "dst")


@dataclass(frozen=True, slots=True)
class Rule:
    """One row of the rule table."""

    title: str = ""
    match: str = ""  # unanchored regex, default flags
    src: str = ""
    dst: str = ""


@dataclass(frozen=True, slots=True)
class CompiledRule:
    """Rule paired with its compiled pattern, or the compile error."""

    index: int
    rule: Rule
    pattern: re.Pattern[str] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.pattern is not None


@dataclass(frozen=True, slots=True)
class LogLine:
    """Non-blank log line with both of its positions."""

    line_no: int  # 0-based index in the original text
    position: int  # 0-based index among non-blank lines
    text: str


@dataclass(frozen=True, slots=True)
class MatchEvent:
    """One (log line, rule) match."""

    src: str
    dst: str
    title: str
    line_index: int  # non-blank position, used for "L<n>" annotations
    line_text: str
    line_no: int  # original index, used for highlighting


class InvalidRule(BaseModel):
    index: int = Field(description="0-based position of the rule in the table.")
    title: str = Field(description="Rule title.")
    match: str = Field(description="Pattern that failed to compile.")
    error: str = Field(description="Regex compiler message.")


class DiagramReport(BaseModel):
    diagram: str = Field(description="Mermaid sequenceDiagram text; empty when nothing matched.")
    participants: list[str] = Field(default_factory=list, description="First-seen participant order.")
    event_count: int = Field(ge=0, description="Number of interactions in the diagram.")
    matched_lines: list[int] = Field(
        default_factory=list, description="Sorted 0-based original line indices that matched."
    )
    invalid_rules: list[InvalidRule] = Field(default_factory=list)
