"""End-to-end translation analysis: load, flatten, scan, aggregate."""

from __future__ import annotations

import logging
from pathlib import Path

from . import app_config
from .app_config import AppConfig
from .catalog_api import Opener
from .catalog_loader import load_catalog
from .duplicates import find_duplicates
from .errors import CatalogError
from .flatten import flatten_keys
from .ignore_rules import IGNORE_FILENAME, IgnoreRules, load_ignore_rules
from .literal_text import find_corpus_missing_translations
from .model import (
    AnalysisResult,
    ApiCatalog,
    LanguageFailure,
    LanguageResult,
)
from .project_scanner import load_corpus
from .report import TranslationLog
from .summary import aggregate
from .usage_scanner import scan_corpus_usage

_log = logging.getLogger(__name__)


def load_language(
    language: str,
    config: AppConfig,
    rules: IgnoreRules,
    *,
    opener: Opener | None = None,
) -> LanguageResult:
    """Load one language and derive its clean key set and duplicate groups."""
    catalog = load_catalog(language, config, opener=opener)
    return LanguageResult(
        language=language,
        catalog=catalog,
        keys=flatten_keys(catalog, rules),
        duplicates=find_duplicates(catalog),
    )


def load_languages(
    config: AppConfig,
    rules: IgnoreRules,
    *,
    log: TranslationLog | None = None,
    opener: Opener | None = None,
) -> tuple[tuple[LanguageResult, ...], tuple[LanguageFailure, ...]]:
    """Process languages in configured order; a failure skips only that language."""
    results: list[LanguageResult] = []
    failures: list[LanguageFailure] = []
    for language in config.languages:
        try:
            result = load_language(language, config, rules, opener=opener)
        except CatalogError as exc:
            _log.warning("Skipping %s: %s", language, exc)
            failures.append(LanguageFailure(language, str(exc)))
            continue
        if log is not None:
            log.append_duplicates(
                language,
                result.duplicates,
                remote=isinstance(result.catalog, ApiCatalog),
            )
        _log.info("Processed %s: Found %d keys", language, len(result.keys))
        results.append(result)
    return tuple(results), tuple(failures)


def run_analysis(
    config: AppConfig,
    rules: IgnoreRules | None = None,
    *,
    log: TranslationLog | None = None,
    opener: Opener | None = None,
) -> AnalysisResult:
    rules = rules if rules is not None else IgnoreRules.empty()
    if log is not None:
        log.start()

    results, failures = load_languages(config, rules, log=log, opener=opener)
    key_universe = frozenset().union(*(result.keys for result in results))

    corpus = load_corpus(config.project_dirs, config.source_extensions)
    _log.info("Analyzing translation usage in %d file(s)", len(corpus.files))
    usage = scan_corpus_usage(corpus, key_universe, config.translation_function)
    missing = find_corpus_missing_translations(
        corpus, translation_function=config.translation_function
    )

    summaries = aggregate(
        {result.language: result.keys for result in results},
        usage,
        {result.language: len(result.duplicates) for result in results},
    )
    if log is not None:
        log.append_missing_translations(missing)
        log.append_unused_keys(usage.unused)

    return AnalysisResult(
        languages=results,
        failures=failures,
        key_universe=key_universe,
        usage=usage,
        summaries=summaries,
        missing_translations=missing,
    )


def analyze_project(
    root: Path,
    *,
    config_path: Path | None = None,
    ignore_path: Path | None = None,
    log_path: Path | None = None,
    opener: Opener | None = None,
) -> tuple[AnalysisResult, Path]:
    """Load config and ignore rules from *root*, then run the analysis.

    Configuration and ignore-rule errors are raised before the log is touched.
    Returns the result and the log file path.
    """
    config = app_config.load(root, config_path)
    rules = load_ignore_rules(ignore_path or root / IGNORE_FILENAME)
    log_file = log_path or root / config.log_file
    _log.info(
        "Translation source: %s; languages: %s",
        config.source_kind,
        ", ".join(config.languages),
    )
    result = run_analysis(
        config, rules, log=TranslationLog(log_file, root=root), opener=opener
    )
    return result, log_file
