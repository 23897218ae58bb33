"""Project configuration loading from `appcheck.config.json`."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import ConfigurationInvalidError

CONFIG_FILENAME = "appcheck.config.json"
DEFAULT_LOG_FILENAME = "translation_check.log"
DEFAULT_SOURCE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")
_DEFAULT_TIMEOUT_SEC = 10.0
_MIN_TIMEOUT_SEC = 1.0
_MAX_TIMEOUT_SEC = 120.0


@dataclass(frozen=True, slots=True)
class LanguageMapping:
    """Alternate API codes declared for one configured language."""

    language: str
    mappings: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Store the effective settings of one analysis run."""

    languages: tuple[str, ...]
    project_dirs: tuple[Path, ...]
    translation_dir: Path | None = None
    api_endpoint: str | None = None
    language_code_format: str = "en_US"
    translation_function: str = "t"
    language_mapping: tuple[LanguageMapping, ...] = ()
    source_extensions: tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS
    request_timeout: float = _DEFAULT_TIMEOUT_SEC
    log_file: str = DEFAULT_LOG_FILENAME

    @property
    def source_kind(self) -> str:
        if self.api_endpoint:
            return "API"
        if self.translation_dir is not None:
            return "Local Files"
        return "none"


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_ext(value: str) -> str:
    return value if value.startswith(".") else f".{value}"


def _normalize_extensions(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        candidate = value.split(",")
    elif isinstance(value, list):
        candidate = value
    else:
        return DEFAULT_SOURCE_EXTENSIONS
    out: list[str] = []
    for item in candidate:
        ext = str(item).strip()
        if not ext:
            continue
        ext = _normalize_ext(ext.lower())
        if ext not in out:
            out.append(ext)
    return tuple(out) if out else DEFAULT_SOURCE_EXTENSIONS


def _normalize_timeout(value: Any) -> float:
    try:
        parsed = float(str(value).strip())
    except (TypeError, ValueError):
        return _DEFAULT_TIMEOUT_SEC
    return max(_MIN_TIMEOUT_SEC, min(parsed, _MAX_TIMEOUT_SEC))


def _normalize_mapping(value: Any) -> tuple[LanguageMapping, ...]:
    if not isinstance(value, list):
        return ()
    out: list[LanguageMapping] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        language = str(item.get("language") or "").strip()
        raw = item.get("mappings")
        if isinstance(raw, str):
            raw = raw.split(",")
        if not language or not isinstance(raw, list):
            continue
        codes = tuple(code for code in (str(m).strip() for m in raw) if code)
        out.append(LanguageMapping(language, codes))
    return tuple(out)


def _string_list(data: dict[str, Any], name: str) -> tuple[str, ...]:
    value = data.get(name)
    if not isinstance(value, list):
        raise ConfigurationInvalidError(
            f"Invalid configuration: {name} should be an array."
        )
    return tuple(item for item in (str(v).strip() for v in value) if item)


def _resolve(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else root / path


def from_dict(data: dict[str, Any], *, root: Path) -> AppConfig:
    """Build a validated config; relative directories resolve against *root*."""
    project_dirs = _string_list(data, "projectDirs")
    languages = _string_list(data, "languages")
    translation_dir = _optional_str(data.get("translationDir"))
    api_endpoint = _optional_str(data.get("apiEndpoint"))
    if translation_dir is None and api_endpoint is None:
        raise ConfigurationInvalidError(
            "Invalid configuration: set translationDir or apiEndpoint."
        )
    return AppConfig(
        languages=languages,
        project_dirs=tuple(_resolve(root, d) for d in project_dirs),
        translation_dir=(
            _resolve(root, translation_dir) if translation_dir is not None else None
        ),
        api_endpoint=api_endpoint,
        language_code_format=str(data.get("languageCodeFormat") or "en_US").strip(),
        translation_function=(
            _optional_str(data.get("translationFunction")) or "t"
        ),
        language_mapping=_normalize_mapping(data.get("languageMapping")),
        source_extensions=_normalize_extensions(data.get("sourceExtensions")),
        request_timeout=_normalize_timeout(
            data.get("requestTimeout", _DEFAULT_TIMEOUT_SEC)
        ),
        log_file=_optional_str(data.get("logFile")) or DEFAULT_LOG_FILENAME,
    )


def load(root: Path, path: Path | None = None) -> AppConfig:
    """Load `appcheck.config.json` from *root* (or an explicit *path*)."""
    config_path = path if path is not None else root / CONFIG_FILENAME
    try:
        text = config_path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise ConfigurationInvalidError(
            f"Configuration not found: {config_path}. Create {CONFIG_FILENAME} first."
        ) from exc
    except OSError as exc:
        raise ConfigurationInvalidError(
            f"Cannot read configuration {config_path}: {exc}"
        ) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationInvalidError(
            f"Configuration {config_path} is not valid JSON: {exc}"
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationInvalidError(
            f"Configuration {config_path} must be a JSON object."
        )
    return from_dict(data, root=root)
