from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .dispatcher import ToolDispatcher, build_dispatcher
from .routers import tools
from .services.root_resolver import resolve_root

logger = logging.getLogger(__name__)


def log_startup(dispatcher: ToolDispatcher) -> None:
    logger.info('Proton Drive MCP server started')
    logger.info('Platform: %s', sys.platform)
    logger.info('Proton Drive path: %s', dispatcher.root)
    logger.info('Path exists: %s', os.path.exists(dispatcher.root))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error('Unhandled error on %s', request.url.path, exc_info=exc)
    return JSONResponse({'detail': 'Internal server error. Please try again.'}, status_code=500)


def create_app(dispatcher: Optional[ToolDispatcher] = None) -> FastAPI:
    if dispatcher is None:
        dispatcher = build_dispatcher(resolve_root(settings.proton_drive_path))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_startup(app.state.dispatcher)
        yield

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.dispatcher = dispatcher
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get('/healthz')
    def healthz():
        return {'ok': True}

    app.include_router(tools.router)
    return app
