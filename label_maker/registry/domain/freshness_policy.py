from label_maker.registry.domain.models import FreshnessDecision

MS_PER_HOUR = 1000 * 60 * 60
DEFAULT_TTL_HOURS = 12.0


def evaluate_freshness(
    captured_at_ms: int | None,
    now_ms: int,
    ttl_hours: float = DEFAULT_TTL_HOURS,
) -> FreshnessDecision:
    # 0 或負值視同沒有時間戳
    if captured_at_ms is None or captured_at_ms <= 0:
        return FreshnessDecision(is_fresh=False, reason="timestamp_missing")

    age_hours = (now_ms - captured_at_ms) / MS_PER_HOUR
    if age_hours < ttl_hours:
        return FreshnessDecision(is_fresh=True, reason="fresh", age_hours=age_hours)
    return FreshnessDecision(is_fresh=False, reason="expired", age_hours=age_hours)
