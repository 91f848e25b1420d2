from datetime import datetime, timezone

from label_maker.config.settings import DEFAULT_BONEYARD_URL

SCRIPT_TAG = "\"9003's label maker\""


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix, e.g. ``2024-05-01T12:00:00.000Z``."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_boneyard_url(
    normalized_name: str,
    credential: str,
    timestamp: str,
    boneyard_url: str = DEFAULT_BONEYARD_URL,
) -> str:
    # 目標頁面直接讀取這些參數，值不做 percent-encoding
    return (
        f"{boneyard_url}?nation={normalized_name}"
        f"&generated_by={credential}"
        f"&timestamp={timestamp}"
        f"&script={SCRIPT_TAG}"
    )
