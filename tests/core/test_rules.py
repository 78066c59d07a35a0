from __future__ import annotations

import logging

import pytest

from mcp_log_sequence_server.core.models import Rule
from mcp_log_sequence_server.core.rules import (
    append_rule,
    compile_rules,
    format_rules,
    parse_rules,
    remove_rule,
    update_rule,
)


def test_parse_rules_keeps_declaration_order(rule_text: str) -> None:
    rules = parse_rules(rule_text)
    assert [r.title for r in rules] == ["access", "request", "notify"]
    assert rules[0] == Rule(title="access", match="Component1 func:", src="Client", dst="Web Server")


@pytest.mark.parametrize("text", ["", "   ", "\n\n", " \t\n "])
def test_parse_rules_empty_input(text: str) -> None:
    assert parse_rules(text) == []


def test_parse_rules_header_only() -> None:
    assert parse_rules("title,match,src,dst\n") == []


def test_parse_rules_skips_blank_lines() -> None:
    text = "title,match,src,dst\n\n   \na,x,S,D\n\n"
    assert parse_rules(text) == [Rule(title="a", match="x", src="S", dst="D")]


def test_parse_rules_defaults_missing_fields() -> None:
    rules = parse_rules("title,match,src,dst\nonly,pat")
    assert rules == [Rule(title="only", match="pat", src="", dst="")]


def test_parse_rules_maps_by_header_name() -> None:
    rules = parse_rules("src,dst,title,match,extra\nA,B,t,m,ignored")
    assert rules == [Rule(title="t", match="m", src="A", dst="B")]


def test_parse_rules_header_is_case_sensitive() -> None:
    rules = parse_rules("Title,Match,Src,Dst\nt,m,a,b")
    assert rules == [Rule()]


def test_parse_rules_quoted_fields() -> None:
    rules = parse_rules('title,match,src,dst\n"a,b","x{1,3}",S,D')
    assert rules == [Rule(title="a,b", match="x{1,3}", src="S", dst="D")]


def test_parse_rules_keeps_duplicates_and_empty_rows() -> None:
    rules = parse_rules("title,match,src,dst\na,x,S,D\na,x,S,D\n,,,")
    assert rules == [Rule("a", "x", "S", "D"), Rule("a", "x", "S", "D"), Rule()]


def test_parse_rules_ignores_bom() -> None:
    rules = parse_rules("\ufefftitle,match,src,dst\na,x,S,D")
    assert rules[0].title == "a"


def test_compile_rules_tags_invalid_patterns(caplog: pytest.LogCaptureFixture) -> None:
    rules = [Rule("bad", "(unclosed", "A", "B"), Rule("good", "ok", "A", "B")]
    with caplog.at_level(logging.WARNING, logger="mcp_log_sequence_server.core.rules"):
        compiled = compile_rules(rules)

    assert [c.ok for c in compiled] == [False, True]
    assert compiled[0].error
    assert compiled[0].pattern is None
    assert compiled[1].index == 1
    assert "(unclosed" in caplog.text


@pytest.mark.parametrize(
    "pattern",
    ["a{4294967296}", "(" * 2000 + "a" + ")" * 2000],
    ids=["repeat-overflow", "deep-nesting"],
)
def test_compile_rules_tags_patterns_the_compiler_cannot_build(pattern: str) -> None:
    compiled = compile_rules([Rule("bad", pattern, "A", "B"), Rule("ok", "foo", "C", "D")])

    assert compiled[0].pattern is None
    assert compiled[0].error
    assert compiled[1].ok


def test_parse_rules_skips_only_an_oversized_row(caplog: pytest.LogCaptureFixture) -> None:
    text = "\n".join(
        [
            "title,match,src,dst",
            "ok,foo,C,D",
            "big," + "x" * 200_000 + ",A,B",
            "later,bar,E,F",
        ]
    )
    with caplog.at_level(logging.WARNING, logger="mcp_log_sequence_server.core.rules"):
        rules = parse_rules(text)

    assert [r.title for r in rules] == ["ok", "later"]
    assert "Skipping unreadable rule row" in caplog.text


def test_format_rules_round_trip(rule_text: str) -> None:
    assert format_rules(parse_rules(rule_text)) == rule_text


def test_format_rules_quotes_commas() -> None:
    text = format_rules([Rule(title="a,b", match="x{1,3}", src="S", dst="D")])
    assert text == 'title,match,src,dst\n"a,b","x{1,3}",S,D'
    assert parse_rules(text) == [Rule(title="a,b", match="x{1,3}", src="S", dst="D")]


def test_format_rules_empty() -> None:
    assert format_rules([]) == "title,match,src,dst"


def test_append_rule(rule_text: str) -> None:
    out = append_rule(rule_text, Rule("extra", "boom", "API Server", "DB"))
    rules = parse_rules(out)
    assert len(rules) == 4
    assert rules[-1] == Rule("extra", "boom", "API Server", "DB")


def test_append_empty_rule_survives_reparse(rule_text: str) -> None:
    out = append_rule(rule_text)
    assert out.endswith("\n,,,")
    assert parse_rules(out)[-1] == Rule()


def test_remove_rule(rule_text: str) -> None:
    rules = parse_rules(remove_rule(rule_text, 1))
    assert [r.title for r in rules] == ["access", "notify"]


def test_remove_rule_out_of_range(rule_text: str) -> None:
    with pytest.raises(IndexError):
        remove_rule(rule_text, 3)


def test_update_rule(rule_text: str) -> None:
    rules = parse_rules(update_rule(rule_text, 0, "src", "Browser"))
    assert rules[0].src == "Browser"
    assert rules[0].dst == "Web Server"


def test_update_rule_unknown_field(rule_text: str) -> None:
    with pytest.raises(ValueError):
        update_rule(rule_text, 0, "color", "red")
