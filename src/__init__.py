# src/__init__.py
# ================
# Announce — plays a sound file on the AllStar node over HTTP.
#
# Layers:
#   - src.config    — environment-driven settings
#   - src.playback  — sanitize, check, execute, report
#   - src.api       — FastAPI surface
