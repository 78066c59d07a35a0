"""Module entrypoint.

Allows:
    python -m mcp_log_sequence_server
"""

from __future__ import annotations

from mcp_log_sequence_server.server.sequence_server import main

if __name__ == "__main__":
    main()
