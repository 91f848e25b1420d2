from dataclasses import dataclass, field

ORIGIN_CACHE = "cache"
ORIGIN_REMOTE = "remote"
ORIGIN_FALLBACK = "fallback"


@dataclass(frozen=True)
class RegistrySnapshot:
    names: frozenset[str] = field(default_factory=frozenset)
    captured_at_ms: int | None = None
    origin: str = ORIGIN_FALLBACK

    def __contains__(self, normalized_name: object) -> bool:
        return normalized_name in self.names

    def __len__(self) -> int:
        return len(self.names)

    @classmethod
    def empty(cls) -> "RegistrySnapshot":
        return cls(names=frozenset(), captured_at_ms=None, origin=ORIGIN_FALLBACK)


@dataclass(frozen=True)
class FreshnessDecision:
    is_fresh: bool
    reason: str
    age_hours: float | None = None
