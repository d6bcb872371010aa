"""Entry point for the Booking Services API.

Starts the FastAPI application under uvicorn on the host and port
configured through ``HOST`` and ``PORT`` (default ``0.0.0.0:5000``).
Database credentials and the token secret are read from the
environment or a ``.env`` file in the working directory; see
``.env.example``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from booking_api.app.core.config import settings
from booking_api.app.main import app


logger = logging.getLogger(__name__)


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logger.info("Server running at http://localhost:%d", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
