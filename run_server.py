#!/usr/bin/env python3
"""Development server runner for Nebula Clash.

Set NEBULA_CLASH_STATE_FILE to keep a resumable snapshot of the last game and
NEBULA_CLASH_ADVISOR_PROVIDER to let an LLM advise the hard AI.
"""

import argparse

import uvicorn

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the Nebula Clash API server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=9000, help="Port (default: 9000)")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")
    args = parser.parse_args()

    uvicorn.run(
        "nebula_clash.server.main:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload,  # Auto-reload on code changes
        log_level="info",
    )
