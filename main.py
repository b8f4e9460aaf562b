"""Run the Pokearena roster and battle API with uvicorn.

The catalog source and the SQLite file come from ``POKEARENA_*`` settings;
this script only chooses where the server listens.
"""

from __future__ import annotations

import argparse

import uvicorn

from pokearena.api.app import app


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Serve the creature catalog, roster and battle history over HTTP"
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface for the API to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port for the API")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on source changes while developing",
    )
    args = parser.parse_args()

    if args.reload:
        uvicorn.run("pokearena.api.app:app", host=args.host, port=args.port, reload=True)
    else:
        uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
