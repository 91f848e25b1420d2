"""Infrastructure adapters for the nation registry."""

from label_maker.registry.infrastructure.kv_store_sqlite import SQLiteKeyValueStore
from label_maker.registry.infrastructure.nations_client import NationStatesClient
from label_maker.registry.infrastructure.prompt_io import BufferPromptIO, ConsolePromptIO

__all__ = ["BufferPromptIO", "ConsolePromptIO", "NationStatesClient", "SQLiteKeyValueStore"]
