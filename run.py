"""
Run the mortgage application API.
Usage: python3 run.py [--host 0.0.0.0] [--port 8000]
"""
import argparse

import uvicorn

from config import settings

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()
    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
