from typing import Any, Protocol, Sequence, runtime_checkable

import aiohttp


@runtime_checkable
class KeyValueStorePort(Protocol):
    def get(self, key: str) -> Any | None: ...
    """Return the decoded value for key, or None when absent or unreadable."""

    def set(self, key: str, value: Any) -> None: ...
    """Store a single value."""

    def replace_snapshot(self, names: Sequence[str], captured_at_ms: int) -> None: ...
    """Overwrite the cached name list and its timestamp as one unit."""

    def close(self) -> None: ...
    """Release resources."""


@runtime_checkable
class RegistryClientPort(Protocol):
    async def fetch_nations(self, session: aiohttp.ClientSession, credential: str) -> list[str] | None: ...
    """Fetch normalized nation names, or None on any failure."""


@runtime_checkable
class CredentialProviderPort(Protocol):
    def obtain(self) -> str: ...
    """Return the client identifier sent with registry requests."""


@runtime_checkable
class PromptPort(Protocol):
    def input(self, prompt: str = "") -> str: ...
