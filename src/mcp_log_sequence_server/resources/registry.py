"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_log_sequence_server.core.config import BASE_DIR_ENV, resolve_diagram_config
from mcp_log_sequence_server.core.loading import ALLOWED_FILE_SUFFIXES, base_dir, read_text
from mcp_log_sequence_server.core.models import DiagramReport

SAMPLE_RULES = (
    "title,match,src,dst\n"
    "access,Component1 func:,Client,Web Server\n"
    "request,Component2 func:.* str=abc,Web Server,API Server\n"
    "notify,Component3 func:.* str=abc,API Server,Web Server\n"
)

SAMPLE_LOG = (
    "Nov  2 12:34:56 : [12345678.012345] hogehoge function exec\n"
    "Nov  2 12:34:56 : [12345678.012345] Component1 func:1245 hogehoge val 1\n"
    "Nov  2 12:34:56 : [12345678.012345] hogehoge2 func exec\n"
    "Nov  2 12:34:56 : [12345678.012345] Component2 func:1245 str=abc val 1\n"
    "Nov  2 12:34:56 : [12345678.012345] Component2 func:1245 str=def val 2\n"
    "Nov  2 12:34:56 : [12345678.012345] hogehoge function ret: 0\n"
    "Nov  2 12:34:56 : [12345678.012345] Component3 str=abc val 1\n"
)


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-sequence/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
        return (
            "Resources:\n"
            "- app://log-sequence/help\n"
            "- app://log-sequence/examples/rules\n"
            "- app://log-sequence/examples/log\n"
            "- app://log-sequence/schemas/diagram-report\n"
            f"- file://{{path}} (restricted to {BASE_DIR_ENV}; allowed: {allowed}, .gz)\n"
            "\nRule table columns: title,match,src,dst (match is a regex searched in each line)\n"
            f"\nBase directory: {base_dir()}\n"
        )

    @mcp.resource("app://log-sequence/examples/rules")
    def sample_rules() -> str:
        """Return an example rule table."""
        return SAMPLE_RULES

    @mcp.resource("app://log-sequence/examples/log")
    def sample_log() -> str:
        """Return a log the example rule table matches."""
        return SAMPLE_LOG

    @mcp.resource("app://log-sequence/schemas/diagram-report")
    def diagram_report_schema() -> dict[str, Any]:
        """Return the JSON schema for diagram tool responses."""
        return DiagramReport.model_json_schema()

    @mcp.resource("file://{path}")
    async def read_file(path: str) -> str:
        """Read a rule or log file from within LOG_SEQUENCE_BASE_DIR."""
        return await read_text(path, max_bytes=resolve_diagram_config().max_file_bytes)
