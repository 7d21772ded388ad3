"""
src/api/announce.py
====================
API Endpoint — Announce

Responsibility:
    - Expose POST /run_announcement (and the legacy /run_announcement.php)
    - Read the ``file`` form field (urlencoded or multipart)
    - Delegate to PlaybackHandler and return its sentence as text/plain
    - Answer any other method, standard or extension, with 405
    - Optionally report the playback outcome to ANNOUNCE_WEBHOOK_URL after
      the reply has been sent
    - Expose GET /health

This module does NOT:
    - Authenticate callers (left to the fronting web server)
    - Queue, retry, or time out playback
"""

import asyncio
import logging
from typing import Any

import aiohttp
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.background import BackgroundTask
from starlette.routing import Route

from src.config import Settings
from src.playback.executor import ElevatedExecutor
from src.playback.handler import HandlerResponse, PlaybackHandler, PlaybackOutcome

logger = logging.getLogger("announce.api")

VERSION = "1.0.0"
ANNOUNCE_PATHS = ("/run_announcement", "/run_announcement.php")


# ---------------------------------------------------------------------------
# Webhook
# ---------------------------------------------------------------------------


async def notify_webhook(url: str, payload: dict[str, Any], timeout: float) -> None:
    """POST ``payload`` as JSON to ``url``. Failures are logged, never raised."""
    try:
        async with aiohttp.ClientSession() as session:
            async with session.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                logger.info("Webhook POST to %s — status %d", url, resp.status)
    except Exception as exc:
        logger.error("Webhook POST failed: %s", exc)


def _webhook_payload(response: HandlerResponse) -> dict[str, Any]:
    request = response.request
    return {
        "file": request.sanitized_filename if request else None,
        "base_name": request.base_name if request else None,
        "played": response.outcome is PlaybackOutcome.PLAYING,
        "message": response.body,
    }


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def create_app(
    settings: Settings | None = None,
    executor: ElevatedExecutor | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Service settings; read from the environment when omitted.
        executor: Replacement for the elevated executor (tests pass a fake).
    """
    if settings is None:
        settings = Settings.from_env()

    handler = PlaybackHandler.from_settings(settings, executor)

    app = FastAPI(
        title="Announce",
        description="Plays a sound file on the AllStar node on request.",
        version=VERSION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.handler = handler

    async def run_announcement(request: Request) -> PlainTextResponse:
        form_fields: dict[str, Any] = {}
        if request.method.upper() == "POST":
            form = await request.form()
            form_fields = dict(form)

        # Blocking subprocess call; keep it off the event loop
        response = await asyncio.to_thread(handler.handle, request.method, form_fields)

        logger.info(
            "%s %s -> %d %s",
            request.method,
            request.url.path,
            response.status_code,
            response.outcome.value,
        )

        background = None
        if settings.webhook_url and response.reached_playback:
            # Runs after the reply has been sent
            background = BackgroundTask(
                notify_webhook, settings.webhook_url, _webhook_payload(response), settings.webhook_timeout,
            )
        elif response.reached_playback:
            logger.debug("ANNOUNCE_WEBHOOK_URL not configured — skipping POST.")

        return PlainTextResponse(response.body, status_code=response.status_code, background=background)

    # methods=None: every verb, extension methods included, reaches the handler
    for path in ANNOUNCE_PATHS:
        app.router.routes.append(Route(path, run_announcement, methods=None, include_in_schema=False))

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": VERSION}

    return app
