"""
src/playback/request.py
========================
Playback Request — Announce

Responsibility:
    - Hold the raw filename exactly as submitted
    - Reduce it to its final path segment (the only traversal defence)
    - Derive the base name handed to the playback script

Sanitization strips directory components; it never filters characters
from a blacklist.
"""

import os
from dataclasses import dataclass

# Final segments that would still point outside (or at) the sounds directory
_UNPLAYABLE_SEGMENTS = frozenset({"", ".", ".."})


def sanitize_filename(raw_filename: str) -> str:
    """
    Return the final path segment of ``raw_filename``.

    Trailing slashes are dropped first, so ``"a/b/"`` yields ``"b"`` and
    ``"../../etc/passwd"`` yields ``"passwd"``.
    """
    stripped = raw_filename.rstrip("/")
    return os.path.basename(stripped)


def strip_extension(filename: str) -> str:
    """
    Remove the last extension: ``"test.ul"`` -> ``"test"``.

    Everything from the last dot is dropped, so a name that starts with a
    dot and has no other one (``".ul"``) yields ``""``.
    """
    dot_index = filename.rfind(".")
    if dot_index == -1:
        return filename
    return filename[:dot_index]


@dataclass(frozen=True)
class PlaybackRequest:
    raw_filename: str
    sanitized_filename: str
    base_name: str

    @classmethod
    def from_raw(cls, raw_filename: str) -> "PlaybackRequest":
        sanitized = sanitize_filename(raw_filename)
        return cls(
            raw_filename=raw_filename,
            sanitized_filename=sanitized,
            base_name=strip_extension(sanitized),
        )

    @property
    def is_playable_name(self) -> bool:
        """False for ``""``, ``"."`` and ``".."``, which never name a sound file."""
        return self.sanitized_filename not in _UNPLAYABLE_SEGMENTS

    def resolve(self, sounds_dir: str) -> str:
        """Full path of the sound file inside ``sounds_dir``."""
        return sounds_dir.rstrip("/") + "/" + self.sanitized_filename
