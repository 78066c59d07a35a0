"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: callable actions (e.g., turn a log into a sequence diagram)
- Resources: addressable data blobs (e.g., example rules, file contents via URI)
- Prompts: reusable conversation templates that clients can invoke

Run locally (stdio):
    python -m mcp_log_sequence_server.server.sequence_server
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Literal

from mcp.server.fastmcp import FastMCP

from mcp_log_sequence_server.core.config import LOG_LEVEL_ENV
from mcp_log_sequence_server.prompts.registry import register_prompts
from mcp_log_sequence_server.resources.registry import register_resources
from mcp_log_sequence_server.tools.sequence import (
    edit_rule_table_impl,
    generate_sequence_diagram_from_files_impl,
    generate_sequence_diagram_impl,
    highlight_log_impl,
    parse_rule_table_impl,
)

LOGGER = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure a reasonable default logging setup.

    Logs go to stderr; stdout is reserved for the stdio transport.
    """
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("log-sequence", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
def generate_sequence_diagram(
    rule_text: str,
    log_text: str,
    include_line_annotations: bool | None = None,
) -> dict[str, Any]:
    """Turn log text into a Mermaid sequence diagram using a rule table.

    Parameters
    ----------
    rule_text:
        CSV with header ``title,match,src,dst``. ``match`` is a regex searched
        anywhere in each log line; ``src``/``dst`` name the participants.
    log_text:
        Newline-delimited log records.
    include_line_annotations:
        Add a ``Note`` after each message with ``L<n> : <line>`` (n counts
        non-blank lines from 1). Defaults to LOG_SEQUENCE_LINE_ANNOTATIONS (true).

    Returns
    -------
    dict:
        {"diagram": str, "participants": list[str], "event_count": int,
         "matched_lines": list[int], "invalid_rules": list[dict]}
    """
    return generate_sequence_diagram_impl(
        rule_text=rule_text,
        log_text=log_text,
        include_line_annotations=include_line_annotations,
    )


@mcp.tool()
async def generate_sequence_diagram_from_files(
    rules_path: str,
    log_path: str,
    include_line_annotations: bool | None = None,
) -> dict[str, Any]:
    """Same as generate_sequence_diagram, reading both inputs from files.

    Paths are resolved under LOG_SEQUENCE_BASE_DIR. Plain text and .gz are supported.
    """
    return await generate_sequence_diagram_from_files_impl(
        rules_path=rules_path,
        log_path=log_path,
        include_line_annotations=include_line_annotations,
    )


@mcp.tool()
def parse_rule_table(rule_text: str) -> dict[str, Any]:
    """Return the rules as parsed from CSV text (missing cells become "")."""
    return parse_rule_table_impl(rule_text=rule_text)


@mcp.tool()
def highlight_log(rule_text: str, log_text: str) -> dict[str, Any]:
    """Return every log line with a flag telling whether any rule matched it.

    ``line_no`` is the 0-based index in the original text, blank lines included.
    """
    return highlight_log_impl(rule_text=rule_text, log_text=log_text)


@mcp.tool()
def edit_rule_table(
    rule_text: str,
    action: Literal["append", "remove", "update"],
    index: int | None = None,
    field: Literal["title", "match", "src", "dst"] | None = None,
    value: str = "",
    title: str = "",
    match: str = "",
    src: str = "",
    dst: str = "",
) -> dict[str, Any]:
    """Append, remove or update a row and return the new rule text."""
    return edit_rule_table_impl(
        rule_text=rule_text,
        action=action,
        index=index,
        field=field,
        value=value,
        title=title,
        match=match,
        src=src,
        dst=dst,
    )


def main() -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
