"""Entry point for the storefront edge service.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example in a container where you
only specify a single Python file to run.

Configuration (rendering service token, data store URL and key, site
URL) is read from environment variables; see
``storefront_edge/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from storefront_edge.app.main import app


async def main() -> None:
    """Serve the edge app until interrupted.

    Host and port are read from ``EDGE_HOST`` and ``EDGE_PORT``.
    Defaults are ``0.0.0.0`` and ``8000``.
    """
    host = os.getenv("EDGE_HOST", "0.0.0.0")
    port = int(os.getenv("EDGE_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info", proxy_headers=True)
    server = Server(config)
    logging.getLogger(__name__).info("Starting storefront edge on %s:%s", host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
