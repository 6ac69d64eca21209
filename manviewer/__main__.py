"""``python -m manviewer``: serve the API with host and port from settings."""

from __future__ import annotations

import argparse
from typing import Sequence

import uvicorn

from .config import get_settings

APP = "manviewer.main:app"


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="manviewer", description="Run the ManViewer API.")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Launch the API; command-line flags override the environment settings."""

    args = build_parser().parse_args(argv)
    uvicorn.run(APP, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
