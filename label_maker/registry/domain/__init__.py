"""Domain models and deterministic rules for the nation registry."""

from label_maker.registry.domain.freshness_policy import evaluate_freshness
from label_maker.registry.domain.models import FreshnessDecision, RegistrySnapshot
from label_maker.registry.domain.rules import normalize_nation_name, parse_nation_list

__all__ = [
    "evaluate_freshness",
    "FreshnessDecision",
    "normalize_nation_name",
    "parse_nation_list",
    "RegistrySnapshot",
]
