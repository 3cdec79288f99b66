from __future__ import annotations

from fastapi import FastAPI
from loguru import logger

from germanwiki.scraper import PageResolver

from .client import ClientOptions, WiktionaryClient


class Services:
    app: FastAPI
    client: WiktionaryClient
    resolver: PageResolver

    async def setup(self, app: FastAPI, options: ClientOptions | None = None):
        self.app = app
        self.client = await WiktionaryClient(options or ClientOptions.from_env()).setup()
        self.resolver = PageResolver(self.client)
        logger.info("Upstream client ready: {}", self.client)

    async def close(self):
        if hasattr(self, "client"):
            await self.client.close()


services = Services()


def get_resolver() -> PageResolver:
    return services.resolver
