#!/usr/bin/env python3
"""Main entry point for Ledgerview Dashboard"""

import uvicorn
import sys
from pathlib import Path

# Add parent to path so the ledgerview package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dashboard.app import create_app
from ledgerview.config import get_config
from ledgerview.logging_config import setup_logging


def main():
    """Start the dashboard server"""
    config = get_config()
    setup_logging(config.log_level, log_format=config.log_format)
    app = create_app()

    url = f"http://{config.dashboard_host}:{config.dashboard_port}"
    print("📒 Ledgerview Dashboard")
    print(f"💻 Starting on {url}")
    print(f"📊 Ledger API: {'seeded demo data' if config.demo_mode else config.api_base_url}")
    print(f"🔌 API docs: {url}/docs")
    print("🛑 Press Ctrl+C to stop")

    uvicorn.run(
        app,
        host=config.dashboard_host,
        port=config.dashboard_port,
        reload=False,
        access_log=False
    )


if __name__ == "__main__":
    main()
