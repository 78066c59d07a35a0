"""Match log lines against compiled rules.

Two line numberings are in play:
- ``line_no``: 0-based index into the original text, blank lines included.
  Used for highlighting.
- ``position``: 0-based index among non-blank lines only. Used for the
  ``L<n>`` annotations in diagram text.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .models import CompiledRule, LogLine, MatchEvent, Rule
from .rules import compile_rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HighlightedLine:
    """Original log line with its match flag."""

    line_no: int
    text: str
    matched: bool


def _iter_raw_lines(log_text: str) -> Iterator[tuple[int, str]]:
    for line_no, line in enumerate(log_text.split("\n")):
        yield line_no, line.rstrip("\r")


def split_log_lines(log_text: str) -> list[LogLine]:
    """Return non-blank lines with original and non-blank positions.

    A trailing ``\\r`` (CRLF input) is removed from each line before matching,
    so ``$`` anchors work on CRLF logs and annotations carry no carriage
    return. Patterns that expect a literal trailing ``\\r`` never match.
    """
    out: list[LogLine] = []
    if not log_text:
        return out
    for line_no, line in _iter_raw_lines(log_text):
        if not line.strip():
            continue
        out.append(LogLine(line_no=line_no, position=len(out), text=line))
    return out


def match_compiled(compiled: Sequence[CompiledRule], log_text: str) -> list[MatchEvent]:
    """Run already-compiled rules over the log; invalid rules are skipped."""
    usable = [c for c in compiled if c.pattern is not None]
    if not usable:
        return []

    events: list[MatchEvent] = []
    lines = split_log_lines(log_text)
    for line in lines:
        for c in usable:
            if c.pattern.search(line.text) is None:
                continue
            events.append(
                MatchEvent(
                    src=c.rule.src,
                    dst=c.rule.dst,
                    title=c.rule.title,
                    line_index=line.position,
                    line_text=line.text,
                    line_no=line.line_no,
                )
            )

    logger.debug(
        "Matched %d events from %d lines against %d rules (%d invalid)",
        len(events),
        len(lines),
        len(compiled),
        len(compiled) - len(usable),
    )
    return events


def match_lines(rules: Sequence[Rule], log_text: str) -> list[MatchEvent]:
    """Return one event per (line, matching rule), in line then rule order."""
    if not rules or not log_text.strip():
        return []
    return match_compiled(compile_rules(rules), log_text)


def matched_line_indices(rules: Sequence[Rule], log_text: str) -> set[int]:
    """Original 0-based indices of lines that matched at least one rule."""
    return {e.line_no for e in match_lines(rules, log_text)}


def highlight_lines(rules: Sequence[Rule], log_text: str) -> list[HighlightedLine]:
    """Every original line (blank ones too) with its match flag."""
    if not log_text:
        return []
    matched = matched_line_indices(rules, log_text)
    return [
        HighlightedLine(line_no=line_no, text=line, matched=line_no in matched)
        for line_no, line in _iter_raw_lines(log_text)
    ]
