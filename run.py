"""Entry point for serving the Portfolio API.

Starts uvicorn with the host, port and log level from the application
settings (``HOST``, ``PORT``, ``LOG_LEVEL``).  Intended to be executed
from the project root, for example in Docker where you only specify a
single Python file to run.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from portfolio_api.app.core.config import settings
from portfolio_api.app.main import app


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
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
