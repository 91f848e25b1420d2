import asyncio

import aiohttp
from aiohttp import ClientError

from label_maker.config.logger_config import logger
from label_maker.config.settings import DEFAULT_API_URL
from label_maker.registry.domain.rules import parse_nation_list


class NationStatesClient:
    def __init__(self, api_url: str = DEFAULT_API_URL) -> None:
        self.api_url = api_url

    async def fetch_nations(self, session: aiohttp.ClientSession, credential: str) -> list[str] | None:
        headers = {"User-Agent": credential or ""}
        try:
            async with session.get(self.api_url, headers=headers) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    logger.error("Error fetching data from NationStates API: HTTP {}: {}", resp.status, body[:200])
                    return None
                text = await resp.text()
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            # ValueError: aiohttp 拒絕含換行等非法字元的 header
            logger.error("Request failed: {}: {}", type(exc).__name__, exc)
            return None

        try:
            names = parse_nation_list(text)
        except Exception as exc:
            logger.error("Unparsable NationStates API response: {}", exc)
            return None

        if names is None:
            logger.error("NationStates API response has no NATIONS element.")
            return None
        return names
