"""
Server entrypoint: start uvicorn with the FastAPI app, or reset the collections and exit.

Run from backend dir:
  python backend_entry.py                  -> serve on HOST:PORT (default 127.0.0.1:3000)
  python backend_entry.py --port 8080
  python backend_entry.py --ops reset      -> wipe and reseed both collections, no server
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

_backend_dir = Path(__file__).resolve().parent
if str(_backend_dir) not in sys.path:
    sys.path.insert(0, str(_backend_dir))


def _default_port() -> int:
    try:
        return int(os.environ.get("PORT", "3000"))
    except ValueError:
        return 3000


def main() -> int:
    parser = argparse.ArgumentParser(description="Mentor assignment service: server or ops subcommand")
    parser.add_argument("--host", default=os.environ.get("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=_default_port())
    parser.add_argument("--ops", choices=["reset"], help="Run ops and exit (no server)")
    args = parser.parse_args()

    if args.ops == "reset":
        from seed.__main__ import run_reset
        import asyncio

        return asyncio.run(run_reset())

    from main import app
    import uvicorn

    logger = logging.getLogger(__name__)
    logger.info("Server Initialized http://%s:%s", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")
    return 0


if __name__ == "__main__":
    sys.exit(main())
