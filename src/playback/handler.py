"""
src/playback/handler.py
========================
Request Handler — Announce

Responsibility:
    Turn one inbound request into one response:
        1. Reject anything but POST (405)
        2. Require a non-empty ``file`` form field ("0" is empty)
        3. Reduce the filename to its final path segment
        4. Require the sound file to exist in the sounds directory
        5. Require the playback script to exist and be executable
        6. Run the script with the base name (extension removed)
        7. Report the outcome as a short English sentence

Every condition is answered at the point it is detected. Nothing here
raises for a bad request; failures are response text with status 200,
except the wrong-method case which is 405.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping

from src.config import Settings
from src.playback.executor import ElevatedExecutor, ExecutionResult
from src.playback.request import PlaybackRequest

logger = logging.getLogger("announce.handler")

FORM_FIELD = "file"

MSG_METHOD_NOT_ALLOWED = "Method not allowed."
MSG_NO_FILE = "No file specified."
MSG_FILE_NOT_FOUND = "UL file not found: {filename}"
MSG_SCRIPT_UNAVAILABLE = "playaudio.sh not found or not executable."
MSG_PLAYING = "Playing {base_name} now."
MSG_FAILED = "Failed to play {base_name}. Output: {output}"

_EMPTY_VALUES = frozenset({"", "0"})


class PlaybackOutcome(str, Enum):
    METHOD_NOT_ALLOWED = "method_not_allowed"
    MISSING_INPUT = "missing_input"
    FILE_NOT_FOUND = "file_not_found"
    SCRIPT_UNAVAILABLE = "script_unavailable"
    EXECUTION_FAILURE = "execution_failure"
    PLAYING = "playing"


@dataclass(frozen=True)
class HandlerResponse:
    status_code: int
    body: str
    outcome: PlaybackOutcome
    request: PlaybackRequest | None = None

    def __iter__(self) -> Iterator[Any]:
        # Unpacks as (http_status, body_text)
        return iter((self.status_code, self.body))

    @property
    def reached_playback(self) -> bool:
        return self.outcome in (PlaybackOutcome.PLAYING, PlaybackOutcome.EXECUTION_FAILURE)


class PlaybackHandler:
    """
    Stateless request handler. One instance can serve any number of
    concurrent requests; all per-request data lives in local variables.

    Args:
        sounds_dir:  Directory holding the playable sound files.
        play_script: Path of the playback script.
        executor:    Capability used to run the script with raised privileges.
    """

    def __init__(self, sounds_dir: str, play_script: str, executor: ElevatedExecutor):
        self.sounds_dir = sounds_dir
        self.play_script = play_script
        self.executor = executor

    @classmethod
    def from_settings(cls, settings: Settings, executor: ElevatedExecutor | None = None) -> "PlaybackHandler":
        if executor is None:
            executor = ElevatedExecutor(settings.elevation_command)
        return cls(settings.sounds_dir, settings.play_script, executor)

    def handle(self, method: str, form_fields: Mapping[str, Any]) -> HandlerResponse:
        if method.upper() != "POST":
            logger.warning("Rejected %s request.", method)
            return HandlerResponse(405, MSG_METHOD_NOT_ALLOWED, PlaybackOutcome.METHOD_NOT_ALLOWED)

        raw_filename = form_fields.get(FORM_FIELD)
        # Uploaded file parts are not filenames; "0" counts as empty
        if not isinstance(raw_filename, str) or raw_filename in _EMPTY_VALUES:
            logger.warning("Request without a file name.")
            return HandlerResponse(200, MSG_NO_FILE, PlaybackOutcome.MISSING_INPUT)

        request = PlaybackRequest.from_raw(raw_filename)
        if request.sanitized_filename != raw_filename:
            logger.info("Filename %r reduced to %r", raw_filename, request.sanitized_filename)

        if not self._sound_file_exists(request):
            logger.warning("Sound file not found: %s", request.sanitized_filename)
            return HandlerResponse(
                200,
                MSG_FILE_NOT_FOUND.format(filename=request.sanitized_filename),
                PlaybackOutcome.FILE_NOT_FOUND,
                request,
            )

        if not self._script_available():
            logger.error("Playback script missing or not executable: %s", self.play_script)
            return HandlerResponse(200, MSG_SCRIPT_UNAVAILABLE, PlaybackOutcome.SCRIPT_UNAVAILABLE, request)

        result: ExecutionResult = self.executor.run(self.play_script, request.base_name)

        if result.succeeded:
            logger.info("Playing %s", request.base_name)
            return HandlerResponse(
                200,
                MSG_PLAYING.format(base_name=request.base_name),
                PlaybackOutcome.PLAYING,
                request,
            )

        logger.warning("Playback of %s failed with exit code %d", request.base_name, result.returncode)
        return HandlerResponse(
            200,
            MSG_FAILED.format(base_name=request.base_name, output="\n".join(result.output_lines)),
            PlaybackOutcome.EXECUTION_FAILURE,
            request,
        )

    # ------------------------------------------------------------------
    # Filesystem checks
    # ------------------------------------------------------------------

    def _sound_file_exists(self, request: PlaybackRequest) -> bool:
        if not request.is_playable_name:
            return False
        # Any existing entry counts, subdirectories included
        return os.path.exists(request.resolve(self.sounds_dir))

    def _script_available(self) -> bool:
        return os.path.isfile(self.play_script) and os.access(self.play_script, os.X_OK)
