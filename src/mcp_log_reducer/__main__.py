"""Module entrypoint.

Allows:
    python -m mcp_log_reducer -s app.log
"""

from __future__ import annotations

from mcp_log_reducer.cli import main

if __name__ == "__main__":
    main()
