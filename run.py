#!/usr/bin/env python3
"""
Digital Bank Entry Point

Starts the FastAPI server with an empty in-memory ledger.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from digital_bank.api import run_server
from digital_bank.config import get_config


if __name__ == "__main__":
    config = get_config()
    print("Starting Digital Bank...")
    print(f"API available at: http://localhost:{config.api_port}")
    print(f"Documentation at: http://localhost:{config.api_port}/docs")
    print()

    try:
        run_server()
    except KeyboardInterrupt:
        print("\nShutting down Digital Bank...")
