from __future__ import annotations

import asyncio
from os import environ as env
from typing import Any, Optional

from aiohttp import ClientError, ClientResponseError, ClientSession, ClientTimeout
from loguru import logger
from pydantic import Field
from ujson import JSONDecodeError, loads
from yarl import URL

from .base import BaseModel
from .errors import UpstreamUnavailable

DEFAULT_API = "https://de.wiktionary.org/w/api.php"
DEFAULT_USER_AGENT = "JSONCard/1.0 (+https://thegeneralapps.com)"


class ClientOptions(BaseModel):
    api_url: str = Field(default=DEFAULT_API)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    accept_header: str = Field(default="application/json")
    timeout_ms: int = Field(default=10_000, gt=0)

    @classmethod
    def from_env(cls) -> ClientOptions:
        return cls(
            api_url=env.get("WIKTIONARY_API", DEFAULT_API),
            user_agent=env.get("WIKTIONARY_USER_AGENT", DEFAULT_USER_AGENT),
            accept_header=env.get("WIKTIONARY_ACCEPT", "application/json"),
            timeout_ms=int(env.get("WIKTIONARY_TIMEOUT_MS", 10_000)),
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept_header,
        }


class WiktionaryClient:
    """Thin JSON client for the MediaWiki action API."""

    options: ClientOptions
    session: Optional[ClientSession]

    def __init__(self, options: Optional[ClientOptions] = None) -> None:
        self.options = options or ClientOptions()
        self.session = None

    def __repr__(self) -> str:
        return f"<WiktionaryClient api={self.options.api_url} timeout={self.options.timeout_ms}ms>"

    async def setup(self) -> WiktionaryClient:
        if not self.session or self.session.closed:
            self.session = ClientSession(
                headers=self.options.headers,
                timeout=ClientTimeout(total=self.options.timeout_ms / 1000),
            )

        return self

    async def close(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def query(self, **params: Any) -> dict:
        """Issue a single GET against the action API, without retrying."""

        await self.setup()
        assert self.session is not None

        url = URL(self.options.api_url)
        params = {"format": "json", **params}
        logger.debug("Requesting {} with {}", url, params)
        try:
            async with self.session.get(url, params=params) as response:
                response.raise_for_status()
                body = await response.text()

        except ClientResponseError as exc:
            logger.error("Upstream answered {} {} for {}", exc.status, exc.message, params)
            raise UpstreamUnavailable(
                "The upstream wiki answered with an error.",
                status=exc.status,
                status_text=exc.message or None,
            ) from exc

        except asyncio.TimeoutError as exc:
            logger.error(
                "Upstream timed out after {}ms for {}",
                self.options.timeout_ms,
                params,
            )
            raise UpstreamUnavailable("The upstream wiki timed out.") from exc

        except ClientError as exc:
            logger.error("Upstream couldn't be reached: {}", exc)
            raise UpstreamUnavailable("The upstream wiki couldn't be reached.") from exc

        try:
            data = loads(body)
        except JSONDecodeError as exc:
            raise UpstreamUnavailable("The upstream wiki didn't answer with JSON.") from exc

        if not isinstance(data, dict):
            raise UpstreamUnavailable("The upstream wiki didn't answer with a JSON object.")

        return data
