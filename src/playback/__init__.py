# src/playback/__init__.py
# =========================
# Announcement Playback Layer — Announce
#
# Responsibility:
#   - Sanitize the requested filename to a single path segment
#   - Check the sound file and the playback script on disk
#   - Run the playback script through the elevation command
#   - Translate the exit code into the user-facing sentence
#
# Public API:
#   - PlaybackHandler   — handle(method, form_fields) -> (status, body)
#   - ElevatedExecutor  — argument-list subprocess runner
#   - PlaybackRequest   — per-request filename entity

from src.playback.request import PlaybackRequest, sanitize_filename, strip_extension  # noqa: F401
from src.playback.executor import ElevatedExecutor, ExecutionResult  # noqa: F401
from src.playback.handler import (  # noqa: F401
    HandlerResponse,
    PlaybackHandler,
    PlaybackOutcome,
)
