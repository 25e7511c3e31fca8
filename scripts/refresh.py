from __future__ import annotations

import asyncio

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings
from presentation.cli import RefreshCommand


def main() -> int:
    settings.create_directories()
    bootstrap_logging(service="refresh", level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, log_file_name="tracker.jsonl")
    try:
        # cron-style: one cycle, then drain whatever the budget left behind
        return asyncio.run(RefreshCommand().run(catch_up=True))
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
