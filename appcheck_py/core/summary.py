"""Per-language usage statistics derived from the global usage result."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .model import LanguageSummary, UsageResult

BAND_GOOD = "good"
BAND_FAIR = "fair"
BAND_POOR = "poor"


def summarize_language(
    language: str,
    keys: Iterable[str],
    usage: UsageResult,
    duplicate_count: int = 0,
) -> LanguageSummary:
    language_keys = frozenset(keys)
    used = usage.used & language_keys
    return LanguageSummary(
        language=language,
        total_keys=len(language_keys),
        used_keys=used,
        unused_keys=language_keys - used,
        duplicate_count=duplicate_count,
    )


def aggregate(
    language_keys: Mapping[str, Iterable[str]],
    usage: UsageResult,
    duplicate_counts: Mapping[str, int],
) -> tuple[LanguageSummary, ...]:
    """Re-split *usage* per language; only languages present in *language_keys* appear."""
    return tuple(
        summarize_language(language, keys, usage, duplicate_counts.get(language, 0))
        for language, keys in language_keys.items()
    )


def usage_band(percentage: float) -> str:
    """Classify a usage percentage for report highlighting."""
    if percentage > 80:
        return BAND_GOOD
    if percentage > 50:
        return BAND_FAIR
    return BAND_POOR
