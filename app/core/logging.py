# app/core/logging.py
import logging
import sys


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure root logging to stdout. No-op if already configured."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    return logging.getLogger("app")
