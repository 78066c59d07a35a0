"""Rule table parsing, compilation and serialization.

Rule text is CSV with a header row naming ``title,match,src,dst``. Parsing is
lenient: partially typed rows are kept with missing fields set to ``""``.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import replace

from .models import RULE_FIELDS, CompiledRule, Rule

logger = logging.getLogger(__name__)


def _is_blank_row(row: Sequence[str]) -> bool:
    return not row or (len(row) == 1 and not row[0].strip())


def parse_rules(rule_text: str) -> list[Rule]:
    """Parse CSV rule text into rules, preserving declaration order."""
    if not rule_text or not rule_text.strip():
        return []

    text = rule_text.removeprefix("\ufeff")
    header: list[str] | None = None
    rules: list[Rule] = []

    reader = csv.reader(io.StringIO(text, newline=""))
    while True:
        # Each csv.Error consumes the offending line, so the loop always advances.
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            logger.warning("Skipping unreadable rule row at line %d: %s", reader.line_num, exc)
            continue

        if _is_blank_row(row):
            continue
        if header is None:
            header = row
            continue
        values: dict[str, str] = {}
        for name, value in zip(header, row):
            values.setdefault(name, value)
        rules.append(Rule(**{f: values.get(f, "") for f in RULE_FIELDS}))

    return rules


def compile_rules(rules: Iterable[Rule]) -> list[CompiledRule]:
    """Compile each rule's pattern; failures are recorded, not raised."""
    out: list[CompiledRule] = []
    for index, rule in enumerate(rules):
        try:
            pattern = re.compile(rule.match)
        except (re.error, OverflowError, RecursionError) as exc:
            logger.warning("Invalid regex pattern in rule %d (%r): %s", index, rule.match, exc)
            out.append(CompiledRule(index=index, rule=rule, error=str(exc)))
            continue
        out.append(CompiledRule(index=index, rule=rule, pattern=pattern))
    return out


def format_rules(rules: Iterable[Rule]) -> str:
    """Serialize rules back to CSV text with the standard header."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(RULE_FIELDS)
    for rule in rules:
        writer.writerow([getattr(rule, f) for f in RULE_FIELDS])
    return buf.getvalue()[:-1]


def append_rule(rule_text: str, rule: Rule | None = None) -> str:
    """Return rule text with ``rule`` (default: an empty row) appended."""
    rules = parse_rules(rule_text)
    rules.append(rule or Rule())
    return format_rules(rules)


def remove_rule(rule_text: str, index: int) -> str:
    """Return rule text without the row at ``index``."""
    rules = parse_rules(rule_text)
    if not 0 <= index < len(rules):
        raise IndexError(f"Rule index {index} out of range (have {len(rules)} rules)")
    del rules[index]
    return format_rules(rules)


def update_rule(rule_text: str, index: int, field: str, value: str) -> str:
    """Return rule text with one cell replaced."""
    if field not in RULE_FIELDS:
        raise ValueError(f"Unknown rule field '{field}'. Valid fields: {', '.join(RULE_FIELDS)}")
    rules = parse_rules(rule_text)
    if not 0 <= index < len(rules):
        raise IndexError(f"Rule index {index} out of range (have {len(rules)} rules)")
    rules[index] = replace(rules[index], **{field: value})
    return format_rules(rules)
