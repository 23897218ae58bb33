"""Backend-core public surface – re-export runtime API."""

from __future__ import annotations

from .analysis import analyze_project, run_analysis
from .catalog_loader import load_catalog
from .duplicates import find_duplicates
from .errors import (
    AppCheckError,
    CatalogError,
    ConfigurationInvalidError,
    IgnoreRuleCompileError,
    MalformedCatalogError,
    SourceUnavailableError,
)
from .flatten import flatten_catalog, flatten_keys
from .ignore_rules import IgnoreRules, load_ignore_rules, parse_ignore_rules, should_ignore
from .literal_text import find_missing_translations
from .model import (
    AnalysisResult,
    ApiCatalog,
    DuplicateGroup,
    LanguageSummary,
    LocalCatalog,
    MissingTranslationFinding,
    UsageResult,
)
from .summary import aggregate
from .usage_scanner import scan_usage

__all__ = [
    "aggregate",
    "analyze_project",
    "find_duplicates",
    "find_missing_translations",
    "flatten_catalog",
    "flatten_keys",
    "load_catalog",
    "load_ignore_rules",
    "parse_ignore_rules",
    "run_analysis",
    "scan_usage",
    "should_ignore",
    "AnalysisResult",
    "ApiCatalog",
    "AppCheckError",
    "CatalogError",
    "ConfigurationInvalidError",
    "DuplicateGroup",
    "IgnoreRuleCompileError",
    "IgnoreRules",
    "LanguageSummary",
    "LocalCatalog",
    "MalformedCatalogError",
    "MissingTranslationFinding",
    "SourceUnavailableError",
    "UsageResult",
]
