from __future__ import annotations

import argparse

import uvicorn

from calculator.config import get_settings
from calculator.main import app


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Calculator microservice")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    args = parser.parse_args()

    app.state.sink.info(f"listening to port {args.port}", host=args.host, port=args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
