# 執行設定：預設值 + 環境變數 (.env)
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = "https://www.nationstates.net/cgi-bin/api.cgi?q=nations"
DEFAULT_BONEYARD_URL = "https://www.nationstates.net/page=boneyard"
DEFAULT_CACHE_TTL_HOURS = 12.0
DEFAULT_STORE_PATH = Path("artifacts/label_maker/store.db")


@dataclass(frozen=True)
class LabelMakerSettings:
    api_url: str = DEFAULT_API_URL
    boneyard_url: str = DEFAULT_BONEYARD_URL
    cache_ttl_hours: float = DEFAULT_CACHE_TTL_HOURS
    store_path: Path = DEFAULT_STORE_PATH
    user_agent: str | None = None

    def __post_init__(self) -> None:
        if self.cache_ttl_hours <= 0:
            raise ValueError(f"cache_ttl_hours must be positive, got {self.cache_ttl_hours}")

    @classmethod
    def from_env(cls) -> "LabelMakerSettings":
        ttl_raw = os.getenv("LABEL_MAKER_CACHE_TTL_HOURS")
        try:
            ttl = float(ttl_raw) if ttl_raw else DEFAULT_CACHE_TTL_HOURS
        except ValueError:
            raise ValueError(f"LABEL_MAKER_CACHE_TTL_HOURS is not a number: {ttl_raw!r}") from None

        return cls(
            api_url=os.getenv("LABEL_MAKER_API_URL") or DEFAULT_API_URL,
            boneyard_url=os.getenv("LABEL_MAKER_BONEYARD_URL") or DEFAULT_BONEYARD_URL,
            cache_ttl_hours=ttl,
            store_path=Path(os.getenv("LABEL_MAKER_STORE_PATH") or DEFAULT_STORE_PATH),
            user_agent=os.getenv("LABEL_MAKER_USER_AGENT") or None,
        )
