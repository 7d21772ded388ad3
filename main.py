"""
main.py
========
Central entry point for the Announce service.

Run with:
    uvicorn main:app
"""

import logging

from dotenv import load_dotenv

load_dotenv()  # Load .env before any module reads env vars

# Configure logging for the entire application
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Webhook client transport logs are noise next to the playback log lines
for _client_logger_name in ("aiohttp", "aiohttp.client", "aiohttp.access"):
    logging.getLogger(_client_logger_name).setLevel(logging.WARNING)

from src.api.announce import create_app  # noqa: E402
from src.config import Settings  # noqa: E402

settings = Settings.from_env()
app = create_app(settings)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.host, port=settings.port)
