from __future__ import annotations

import asyncio

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings
from presentation.cli import BootstrapCommand


def main() -> int:
    settings.create_directories()
    bootstrap_logging(service="bootstrap", level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, log_file_name="tracker.jsonl")
    try:
        return asyncio.run(BootstrapCommand().run(sys.argv[1:] or None))
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
