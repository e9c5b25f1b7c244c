"""
Runtime configuration for the fairmint hosts (CLI and preview API).

Values come from the environment; a .env file in the working directory is
loaded first. The emission engine itself reads none of these.
"""

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("FAIRMINT_LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "FAIRMINT_CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173",
    ).split(",")
    if origin.strip()
]

# Longest schedule the hosts will render (the engine has no limit)
MAX_PREVIEW_ERAS = int(os.getenv("FAIRMINT_MAX_PREVIEW_ERAS", "10000"))

HOST = os.getenv("FAIRMINT_HOST", "127.0.0.1")
PORT = int(os.getenv("FAIRMINT_PORT", "8000"))


def configure_logging(level: str = None) -> logging.Logger:
    """
    Configure the root logger once for a host process.

    Clears existing handlers first to prevent duplicates.
    """
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('[FAIRMINT] %(levelname)s %(name)s: %(message)s'))
    root_logger.addHandler(handler)
    return root_logger
