"""
Development server launcher.

Loads the .env file and serves the scoring API with uvicorn in reload
mode.  DEBUG=true in .env turns on per-calculator trace logging.

Usage:
    python scripts/run_dev.py [--host HOST] [--port PORT]
"""

import argparse
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv(project_root / ".env")

import uvicorn

from app.core.config import settings


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the scoring API locally.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    base_url = f"http://{args.host}:{args.port}"

    print("=" * 60)
    print(f"{settings.PROJECT_NAME} {settings.VERSION}")
    print("=" * 60)
    print(f"API:   {base_url}/api/v1")
    print(f"Docs:  {base_url}/docs")
    print(f"Trace: {'on' if settings.DEBUG else 'off'} (log level {settings.LOG_LEVEL})")
    print("=" * 60)

    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
