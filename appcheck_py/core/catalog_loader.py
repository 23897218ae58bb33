"""Resolve and load one language's catalog from local files or the remote API."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .app_config import AppConfig
from .catalog_api import Opener, fetch_catalog
from .errors import MalformedCatalogError, SourceUnavailableError
from .model import Catalog, LocalCatalog

_log = logging.getLogger(__name__)


def candidate_paths(root: Path, language: str) -> list[Path]:
    """Return existing catalog files for *language* under *root*, in merge order.

    Fixed conventions come first, then `**/{lang}.json`, then every JSON
    file below `{lang}/`.
    """
    fixed = [
        root / f"{language}.json",
        root / language / "translation.json",
        root / "locales" / f"{language}.json",
        root / "locales" / language / "translation.json",
    ]
    found = [path for path in fixed if path.is_file()]
    found.extend(sorted(root.glob(f"**/{language}.json")))
    lang_dir = root / language
    if lang_dir.is_dir():
        found.extend(sorted(lang_dir.glob("**/*.json")))

    seen: set[Path] = set()
    out: list[Path] = []
    for path in found:
        resolved = path.resolve()
        if resolved in seen or not path.is_file():
            continue
        seen.add(resolved)
        out.append(path)
    return out


def _read_json_object(path: Path, *, language: str) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise SourceUnavailableError(
            f"Cannot read translation file {path} for {language}: {exc}",
            language=language,
        ) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedCatalogError(
            f"Translation file {path} for {language} is not valid JSON: {exc}",
            language=language,
        ) from exc
    if not isinstance(data, dict):
        raise MalformedCatalogError(
            f"Translation file {path} for {language} must contain a JSON object.",
            language=language,
        )
    return data


def load_local_catalog(root: Path, language: str) -> LocalCatalog:
    """Merge every matching file; later files win on top-level key collision."""
    paths = candidate_paths(root, language) if root.is_dir() else []
    if not paths:
        raise SourceUnavailableError(
            f"no translation source found for {language}", language=language
        )
    tree: dict[str, Any] = {}
    for path in paths:
        tree.update(_read_json_object(path, language=language))
    _log.debug("Loaded %s from %d file(s)", language, len(paths))
    return LocalCatalog(language=language, tree=tree, sources=tuple(paths))


def load_catalog(
    language: str, config: AppConfig, *, opener: Opener | None = None
) -> Catalog:
    """Load *language* through the source the configuration selects."""
    if config.api_endpoint:
        return fetch_catalog(
            language,
            api_endpoint=config.api_endpoint,
            code_format=config.language_code_format,
            mapping=config.language_mapping,
            timeout=config.request_timeout,
            opener=opener,
        )
    if config.translation_dir is not None:
        return load_local_catalog(config.translation_dir, language)
    raise SourceUnavailableError(
        f"No translation source specified for {language}", language=language
    )
