from __future__ import annotations

import argparse
import os
from typing import Sequence

import uvicorn

APP_PATH = "dinedash.api.main:app"


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the dinedash analytics API.")
    parser.add_argument("--host", default=os.getenv("API_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("API_PORT", "8000")))
    parser.add_argument(
        "--workers",
        type=int,
        default=int(os.getenv("API_WORKERS", "1")),
        help="Worker processes (default: API_WORKERS or 1).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    # the app configures JSON logging itself
    uvicorn.run(
        APP_PATH,
        host=args.host,
        port=args.port,
        workers=args.workers,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
