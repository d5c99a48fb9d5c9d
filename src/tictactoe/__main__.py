"""Entry point for running tic-tac-toe via ``python -m tictactoe``."""

from __future__ import annotations

import logging
import os

import uvicorn


def _stdlib_log_level(name: str) -> int:
    """Map a uvicorn log level name onto one the logging module knows."""

    if name == "trace":
        return logging.DEBUG
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def main() -> None:
    """Start the FastAPI-powered tic-tac-toe web server."""

    host = os.environ.get("TICTACTOE_HOST", "0.0.0.0")
    port = int(os.environ.get("TICTACTOE_PORT", "8000"))
    log_level = os.environ.get("TICTACTOE_LOG_LEVEL", "info").lower()
    logging.basicConfig(level=_stdlib_log_level(log_level))
    uvicorn.run("tictactoe.ui:app", host=host, port=port, log_level=log_level, reload=False)


if __name__ == "__main__":
    main()
