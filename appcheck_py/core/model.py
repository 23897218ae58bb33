from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class LocalCatalog:
    language: str
    tree: Mapping[str, Any]
    sources: tuple[Path, ...]

    @property
    def source_label(self) -> str:
        return ", ".join(path.as_posix() for path in self.sources)

    def leaves(self) -> dict[str, object]:
        # local import avoids an import cycle
        from .flatten import flatten_catalog

        return flatten_catalog(self.tree)


@dataclass(frozen=True, slots=True)
class ApiRecord:
    code: str
    value: object


@dataclass(frozen=True, slots=True)
class ApiCatalog:
    language: str
    records: tuple[ApiRecord, ...]
    url: str

    @property
    def source_label(self) -> str:
        return self.url

    def leaves(self) -> dict[str, object]:
        # the API shape is already flat; a repeated code keeps its last value
        return {record.code: record.value for record in self.records}


Catalog = LocalCatalog | ApiCatalog


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    value: object
    keys: tuple[str, ...]  # first-seen key, then later keys
    source: str = ""


@dataclass(frozen=True, slots=True)
class KeyReference:
    path: Path
    line: int


@dataclass(frozen=True, slots=True)
class UsageResult:
    used: frozenset[str]
    unused: frozenset[str]
    references: Mapping[str, tuple[KeyReference, ...]] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class MissingTranslationFinding:
    path: Path
    line: int  # 1-based
    text: str


@dataclass(frozen=True, slots=True)
class LanguageResult:
    language: str
    catalog: Catalog
    keys: frozenset[str]
    duplicates: tuple[DuplicateGroup, ...]


@dataclass(frozen=True, slots=True)
class LanguageFailure:
    language: str
    reason: str


@dataclass(frozen=True, slots=True)
class LanguageSummary:
    language: str
    total_keys: int
    used_keys: frozenset[str]
    unused_keys: frozenset[str]
    duplicate_count: int

    @property
    def usage_percentage(self) -> float:
        if self.total_keys == 0:
            return 0.0
        return len(self.used_keys) / self.total_keys * 100


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    languages: tuple[LanguageResult, ...]
    failures: tuple[LanguageFailure, ...]
    key_universe: frozenset[str]
    usage: UsageResult
    summaries: tuple[LanguageSummary, ...]
    missing_translations: tuple[MissingTranslationFinding, ...]

    @property
    def duplicate_groups(self) -> tuple[DuplicateGroup, ...]:
        return tuple(group for result in self.languages for group in result.duplicates)
