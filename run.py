"""Entry point for the Bookstore API.

Starts the FastAPI application with Uvicorn on port 80.  Store
credentials and other options are read from the environment (or a
`.env` file in the working directory); see
`bookstore_api/app/core/config.py` for the supported variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from bookstore_api.app.core.config import settings
from bookstore_api.app.core.logging_config import setup_logging
from bookstore_api.app.main import app

HOST = "0.0.0.0"
PORT = 80


async def main() -> None:
    """Serve the API until interrupted."""
    setup_logging(settings.log_level, settings.log_file or None)
    config = Config(app=app, host=HOST, port=PORT, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Server is running on http://localhost:%s", PORT)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())
