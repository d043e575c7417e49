"""Run the gateway with Flask's threaded development server.

Example:
    python -m kidplay_gateway --port 3001 --log-level DEBUG
"""
import argparse
import logging

from .config import SETTINGS
from .server import create_app


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="KidPlay arcade AI gateway")
    ap.add_argument("--host", default="0.0.0.0")
    ap.add_argument("--port", type=int, default=SETTINGS.port)
    ap.add_argument("--log-level", default="INFO", help="Python logging level (e.g., INFO, DEBUG)")
    ap.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
    app = create_app(SETTINGS)
    app.run(host=args.host, port=args.port, debug=args.debug, threaded=True)


if __name__ == "__main__":
    main()
