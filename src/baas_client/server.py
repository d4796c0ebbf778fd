from __future__ import annotations

import asyncio
import logging
import os

from mcp.server.fastmcp import FastMCP

from baas_client.core.client import BaaSClient
from baas_client.core.logging import setup_logging
from baas_client.core.registry import register_discovered_tools

log = logging.getLogger("baas_client.server")


def create_app(client: BaaSClient) -> FastMCP:
    app = FastMCP("baas-client")
    register_discovered_tools(app, client)
    return app


# --- Entry point ----------------------------------------------------------- #


async def main() -> None:
    setup_logging(os.getenv("BAAS_LOG_LEVEL", "INFO"))
    async with BaaSClient.from_env() as client:
        app = create_app(client)
        log.info("Starting stdio server against %s", client.base_url)
        await app.run_stdio_async()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
