"""
src/config.py
==============
Service Configuration — Announce

Responsibility:
    - Read service settings from the environment (``.env`` is loaded by
      main.py before this module is used)
    - Provide the fixed AllStar paths as defaults
    - Fail at start-up on malformed numeric values

This module does NOT:
    - Check that the configured paths exist (that happens per request)
    - Cache or mutate settings after construction
"""

import logging
import os
import shlex
from dataclasses import dataclass

logger = logging.getLogger("announce.config")


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_SOUNDS_DIR = "/usr/local/share/asterisk/sounds"
DEFAULT_PLAY_SCRIPT = "/etc/asterisk/local/playaudio.sh"
DEFAULT_ELEVATION = "sudo"
DEFAULT_WEBHOOK_TIMEOUT = 10.0  # seconds
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


class ConfigurationError(Exception):
    """Raised when an environment variable holds an unusable value."""
    pass


@dataclass(frozen=True)
class Settings:
    sounds_dir: str = DEFAULT_SOUNDS_DIR
    play_script: str = DEFAULT_PLAY_SCRIPT
    elevation_command: tuple[str, ...] = (DEFAULT_ELEVATION,)
    webhook_url: str | None = None
    webhook_timeout: float = DEFAULT_WEBHOOK_TIMEOUT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from ``ANNOUNCE_*`` environment variables.

        ``ANNOUNCE_ELEVATION`` is split shell-style, so ``"sudo -n"`` becomes
        two arguments. An empty value runs the playback script directly.

        Raises:
            ConfigurationError: If the port or webhook timeout is not numeric.
        """
        elevation = os.getenv("ANNOUNCE_ELEVATION", DEFAULT_ELEVATION)

        settings = cls(
            sounds_dir=os.getenv("ANNOUNCE_SOUNDS_DIR", DEFAULT_SOUNDS_DIR),
            play_script=os.getenv("ANNOUNCE_PLAY_SCRIPT", DEFAULT_PLAY_SCRIPT),
            elevation_command=tuple(shlex.split(elevation)),
            webhook_url=os.getenv("ANNOUNCE_WEBHOOK_URL") or None,
            webhook_timeout=_read_float("ANNOUNCE_WEBHOOK_TIMEOUT", DEFAULT_WEBHOOK_TIMEOUT),
            host=os.getenv("ANNOUNCE_HOST", DEFAULT_HOST),
            port=_read_int("ANNOUNCE_PORT", DEFAULT_PORT),
        )

        logger.debug(
            "Settings loaded: sounds_dir=%s play_script=%s elevation=%s webhook=%s",
            settings.sounds_dir,
            settings.play_script,
            " ".join(settings.elevation_command) or "<none>",
            "configured" if settings.webhook_url else "disabled",
        )
        return settings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}.")


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}.")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}.")
    return value
