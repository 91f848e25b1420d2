from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

import aiohttp

from label_maker.annotation.application.annotator import ElementAnnotator
from label_maker.annotation.infrastructure.page_io import default_output_path, load_page, write_page
from label_maker.annotation.infrastructure.soup_document import SoupDocument
from label_maker.config.logger_config import logger
from label_maker.config.settings import LabelMakerSettings
from label_maker.registry.application.credentials import StoredCredentialProvider
from label_maker.registry.application.ports import (
    CredentialProviderPort,
    KeyValueStorePort,
    PromptPort,
    RegistryClientPort,
)
from label_maker.registry.application.snapshot_cache import RegistrySnapshotCache
from label_maker.registry.domain.models import RegistrySnapshot
from label_maker.registry.infrastructure.kv_store_sqlite import SQLiteKeyValueStore
from label_maker.registry.infrastructure.nations_client import NationStatesClient
from label_maker.registry.infrastructure.prompt_io import ConsolePromptIO


@dataclass(frozen=True)
class LabelSummary:
    snapshot_origin: str
    snapshot_size: int
    flagged_total: int
    output_path: str | None


async def resolve_snapshot_async(
    cache: RegistrySnapshotCache,
    credential: str,
) -> RegistrySnapshot:
    async with aiohttp.ClientSession() as session:
        return await cache.get_snapshot(session, credential)


def label_html(
    html: str,
    snapshot: RegistrySnapshot,
    credential: str,
    *,
    boneyard_url: str,
) -> tuple[str, int]:
    document = SoupDocument.from_html(html)
    annotator = ElementAnnotator(credential, boneyard_url=boneyard_url)
    flagged = annotator.annotate(document, snapshot)
    return document.render(), flagged


async def run_label_async(
    page: str | Path,
    *,
    output_path: str | Path | None = None,
    settings: LabelMakerSettings | None = None,
    store: KeyValueStorePort | None = None,
    client: RegistryClientPort | None = None,
    credentials: CredentialProviderPort | None = None,
    prompt_io: PromptPort | None = None,
) -> LabelSummary:
    settings = settings or LabelMakerSettings.from_env()
    owns_store = store is None
    store = store or SQLiteKeyValueStore(settings.store_path)
    try:
        credentials = credentials or StoredCredentialProvider(
            store,
            prompt_io or ConsolePromptIO(),
            preset=settings.user_agent,
        )
        credential = credentials.obtain()

        html = load_page(page, user_agent=credential or None)

        cache = RegistrySnapshotCache(
            store,
            client or NationStatesClient(api_url=settings.api_url),
            ttl_hours=settings.cache_ttl_hours,
        )
        # 先完成快取/下載判斷，再進行 DOM 標記
        snapshot = await resolve_snapshot_async(cache, credential)
    finally:
        if owns_store:
            store.close()

    labelled, flagged = label_html(html, snapshot, credential, boneyard_url=settings.boneyard_url)
    written = write_page(labelled, output_path or default_output_path(page))
    logger.info("Wrote labelled page to {}", str(written))

    return LabelSummary(
        snapshot_origin=snapshot.origin,
        snapshot_size=len(snapshot),
        flagged_total=flagged,
        output_path=str(written),
    )


def run_label(
    page: str | Path,
    *,
    output_path: str | Path | None = None,
    settings: LabelMakerSettings | None = None,
) -> LabelSummary:
    return asyncio.run(run_label_async(page, output_path=output_path, settings=settings))
