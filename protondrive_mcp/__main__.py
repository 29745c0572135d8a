from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

import uvicorn

from .config import settings
from .dispatcher import build_dispatcher
from .logging_config import configure_logging
from .main import create_app, log_startup
from .mcp_server import serve_stdio
from .services.root_resolver import resolve_root

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='protondrive-mcp', description='Expose a Proton Drive folder as MCP tools.')
    parser.add_argument('--transport', choices=('stdio', 'http'), default=settings.transport)
    parser.add_argument('--root', default=settings.proton_drive_path, help='Override the Proton Drive folder')
    parser.add_argument('--host', default=settings.app_host)
    parser.add_argument('--port', type=int, default=settings.app_port)
    parser.add_argument('--log-level', default=settings.log_level)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    root_logger = configure_logging(args.log_level)
    log_level = logging.getLevelName(root_logger.level).lower()

    dispatcher = build_dispatcher(resolve_root(args.root))

    try:
        if args.transport == 'http':
            app = create_app(dispatcher)
            uvicorn.run(app, host=args.host, port=args.port, log_level=log_level)
        else:
            log_startup(dispatcher)
            asyncio.run(serve_stdio(dispatcher, name=settings.app_name, version=settings.app_version))
    except KeyboardInterrupt:
        return 0
    except Exception:
        logger.exception('Failed to start server')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
