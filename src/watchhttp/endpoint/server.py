"""FastAPI HTTP server exposing the latest command output.

The command runner is started as a background task in the application
lifespan. A runner failure is fatal to the whole process.
"""

from __future__ import annotations

import asyncio
import io
import logging
import os
from collections.abc import Callable
from contextlib import asynccontextmanager
from email.utils import formatdate
from typing import AsyncIterator

from fastapi import FastAPI, Response

from watchhttp import __version__
from watchhttp.snapshot.cache import RenderCache
from watchhttp.snapshot.runner import CommandRunner

logger = logging.getLogger(__name__)


def _abort(exc: BaseException) -> None:
    logger.critical("Exiting: %s", exc)
    os._exit(1)


def create_app(
    runner: CommandRunner,
    content_type: str = "",
    cache: RenderCache | None = None,
    on_fatal: Callable[[BaseException], None] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        runner: Source of the latest command output.
        content_type: Value of the Content-Type header, not set when empty.
        cache: Rendering cache; when given the body is its rendering
               instead of the raw output.
        on_fatal: Called when the runner fails. Defaults to terminating
                  the process with exit status 1.
    """
    fatal = on_fatal or _abort

    def _on_runner_done(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Command runner failed: %s", exc)
            fatal(exc)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Startup
        task = asyncio.create_task(app.state.runner.run())
        task.add_done_callback(_on_runner_done)
        app.state.runner_task = task
        logger.info("Endpoint started")
        yield
        # Shutdown
        app.state.runner.stop()
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info("Endpoint stopped")

    app = FastAPI(
        title="watchhttp",
        description="Latest STDOUT of a periodically executed command",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.runner = runner
    app.state.cache = cache

    refresh = f"{runner.interval:.0f}"

    @app.get("/{path:path}")
    def latest_output(path: str) -> Response:
        r: CommandRunner = app.state.runner
        c: RenderCache | None = app.state.cache

        headers = {"Refresh": refresh}
        if content_type:
            headers["Content-Type"] = content_type
        updated_at = r.last_updated_at()
        if updated_at is not None:
            headers["Last-Modified"] = formatdate(updated_at.timestamp(), usegmt=True)

        body = io.BytesIO()
        try:
            if c is not None:
                c.write_to(body)
            else:
                r.write_to(body)
        except (OSError, ValueError) as e:
            logger.error("Failed to write response body: %s", e)

        return Response(content=body.getvalue(), headers=headers)

    return app
