import math
from datetime import datetime, timezone
from typing import Any, Callable

import aiohttp

from label_maker.config.logger_config import logger
from label_maker.registry.application.ports import KeyValueStorePort, RegistryClientPort
from label_maker.registry.domain.freshness_policy import DEFAULT_TTL_HOURS, evaluate_freshness
from label_maker.registry.domain.models import ORIGIN_CACHE, ORIGIN_REMOTE, RegistrySnapshot

CACHE_KEY = "validNationsCache"
TIMESTAMP_KEY = "validNationsCacheTimestamp"

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


class RegistrySnapshotCache:
    """
    Decides between the stored nation snapshot and a fresh registry fetch.

    ``get_snapshot`` never raises: a failed fetch yields an empty snapshot for
    that call and leaves the stored one untouched, so every name on the page
    will be treated as missing.
    """

    def __init__(
        self,
        store: KeyValueStorePort,
        client: RegistryClientPort,
        ttl_hours: float = DEFAULT_TTL_HOURS,
        clock: Clock = _utc_now,
    ) -> None:
        self.store = store
        self.client = client
        self.ttl_hours = ttl_hours
        self.clock = clock

    async def get_snapshot(self, session: aiohttp.ClientSession, credential: str) -> RegistrySnapshot:
        now_ms = to_epoch_ms(self.clock())
        captured_at_ms = self._read_timestamp()
        decision = evaluate_freshness(captured_at_ms, now_ms, self.ttl_hours)

        if decision.is_fresh:
            cached_names = self._read_cached_names()
            if cached_names is not None:
                logger.info(
                    "Using cached nations data ({} names, {:.2f}h old).",
                    len(cached_names),
                    decision.age_hours,
                )
                return RegistrySnapshot(
                    names=frozenset(cached_names),
                    captured_at_ms=captured_at_ms,
                    origin=ORIGIN_CACHE,
                )
            logger.info("Cached timestamp is fresh but nations data is missing; refetching.")
        else:
            logger.info("Nations cache not usable ({}); fetching from registry.", decision.reason)

        try:
            names = await self.client.fetch_nations(session, credential)
        except Exception as exc:
            logger.error("Unexpected error while fetching nations: {}", exc)
            names = None

        if names is None:
            logger.warning("Registry fetch failed; every nation on the page will be flagged.")
            return RegistrySnapshot.empty()

        fetched_at_ms = to_epoch_ms(self.clock())
        try:
            self.store.replace_snapshot(names, fetched_at_ms)
        except Exception as exc:
            logger.error("Failed to persist nations snapshot: {}", exc)

        logger.info("Fetched {} nations from registry.", len(names))
        return RegistrySnapshot(
            names=frozenset(names),
            captured_at_ms=fetched_at_ms,
            origin=ORIGIN_REMOTE,
        )

    def _read_timestamp(self) -> int | None:
        value: Any = self._read_store(TIMESTAMP_KEY)
        # bool 是 int 的子類別，要排除
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            if value is not None:
                logger.warning("Ignoring malformed cache timestamp: {!r}", value)
            return None
        if isinstance(value, float) and not math.isfinite(value):
            logger.warning("Ignoring malformed cache timestamp: {!r}", value)
            return None
        return int(value)

    def _read_cached_names(self) -> list[str] | None:
        value: Any = self._read_store(CACHE_KEY)
        if value is None:
            return None
        if not isinstance(value, list) or not all(isinstance(name, str) for name in value):
            logger.warning("Ignoring malformed nations cache of type {}", type(value).__name__)
            return None
        return value

    def _read_store(self, key: str) -> Any | None:
        # 讀取失敗視同沒有快取
        try:
            return self.store.get(key)
        except Exception as exc:
            logger.error("Failed to read '{}' from store: {}", key, exc)
            return None
