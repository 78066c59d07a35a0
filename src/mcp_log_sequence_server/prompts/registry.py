"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def draft_rules_for_log(log_path: str, max_rules: int = 8) -> list[dict[str, Any]]:
        """Build a prompt that drafts a rule table for an unfamiliar log."""
        return [
            {
                "role": "system",
                "content": (
                    "You design rule tables that turn logs into sequence diagrams. "
                    "Each rule is a CSV row title,match,src,dst where match is a Python "
                    "regular expression searched anywhere in a single log line. "
                    "Prefer short literal anchors (component names, function tags) over "
                    "broad wildcards. Do not invent components that are absent from the log."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Read the log and propose a rule table. Follow this workflow:\n"
                    f"- Draft at most {max_rules} rules, header row first: title,match,src,dst.\n"
                    "- Quote any field that contains a comma.\n"
                    "- Check the draft by calling generate_sequence_diagram with the rule "
                    "text and the log text; revise rules listed under invalid_rules and "
                    "rules that match nothing.\n"
                    "- Return the final CSV in a fenced block, then the Mermaid diagram "
                    "from the last tool call.\n"
                ),
            },
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "Log to analyze:"},
                    {"type": "resource", "uri": f"file://{log_path}"},
                ],
            },
        ]

    @mcp.prompt()
    def explain_sequence_diagram(rules_path: str, log_path: str) -> list[dict[str, Any]]:
        """Build a prompt that narrates the interactions found in a log."""
        return [
            {
                "role": "system",
                "content": (
                    "You are a precise assistant. Explain system behaviour using only the "
                    "interactions returned by the tool; if nothing matched, say so."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Call generate_sequence_diagram_from_files with:\n"
                    f"- rules_path: {rules_path}\n"
                    f"- log_path: {log_path}\n"
                    "- include_line_annotations: true\n\n"
                    "Return this structure:\n"
                    "1) Participants (in diagram order)\n"
                    "2) Flow (one bullet per message; cite the L<n> annotation)\n"
                    "3) Gaps (rules listed under invalid_rules, or expected steps with no match)\n"
                    "4) The Mermaid diagram in a fenced block\n"
                ),
            },
        ]
