"""
Process-wide logging setup for the microservices.
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s:%(message)s"


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None, service_name: str = "service") -> None:
    """
    Log to stdout, and to ``<log_dir>/<service_name>.log`` when a directory is given.

    uvicorn's loggers propagate here as well.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    # Try to add file handler, but continue without it if directory creation fails
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, f"{service_name}.log")))
        except (OSError, PermissionError) as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
