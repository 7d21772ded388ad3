# src/api/__init__.py
# =====================
# API Layer — Announce
#
# Responsibility:
#   - Expose POST /run_announcement (form field ``file``)
#   - Return the playback outcome as a plain-text sentence
#   - Expose GET /health
#
# Public API:
#   - create_app() — build the FastAPI application
