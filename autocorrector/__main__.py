"""Run the autocorrector web server."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import List, Optional

import uvicorn

from autocorrector.config import get_config, set_config, setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="autocorrector", description=__doc__)
    parser.add_argument("--host", help="bind address (default: AUTOCORRECTOR_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="bind port (default: AUTOCORRECTOR_PORT or 3000)")
    parser.add_argument("--log-level", help="log level (default: AUTOCORRECTOR_LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


def serve(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    config = get_config()
    if args.log_level:
        config = replace(config, log=replace(config.log, level=args.log_level))
        set_config(config)
    setup_logging(config)

    host = args.host or config.api_host
    port = args.port or config.api_port
    logger.info("Listening on %s:%d", host, port)
    uvicorn.run("autocorrector.app:app", host=host, port=port, log_level=config.log.level.lower())


if __name__ == "__main__":
    serve()
