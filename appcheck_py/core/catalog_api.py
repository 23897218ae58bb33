"""Remote translation API client and language-code normalization."""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from collections.abc import Callable, Iterable
from typing import Any

from .app_config import LanguageMapping
from .errors import MalformedCatalogError, SourceUnavailableError
from .model import ApiCatalog, ApiRecord

Opener = Callable[..., Any]

_FORMAT_UNDERSCORE = "en_US"
_USER_AGENT = "appcheck-py-catalog-client"


def format_language_code(
    language: str,
    code_format: str,
    mapping: Iterable[LanguageMapping] = (),
) -> str:
    """Map *language* to the code the API expects.

    The first alternate code of a matching mapping entry wins; with the
    `en_US` format a code lacking `_` gains an upper-cased country segment.
    """
    mapped = language
    for entry in mapping:
        if entry.language == language:
            if entry.mappings:
                mapped = entry.mappings[0]
            break
    if code_format == _FORMAT_UNDERSCORE and "_" not in mapped:
        return f"{mapped}_{mapped.upper()}"
    return mapped


def endpoint_for_language(api_endpoint: str, code: str) -> str:
    """Build the request URL; the code is appended to the endpoint verbatim."""
    return f"{api_endpoint}{code}"


def _perform_request(
    url: str, *, language: str, timeout: float, opener: Opener
) -> str:
    request = urllib.request.Request(
        url=url,
        headers={"Accept": "application/json", "User-Agent": _USER_AGENT},
        method="GET",
    )
    try:
        with opener(request, timeout=timeout) as response:  # nosec B310
            status = int(getattr(response, "status", 200))
            if status != 200:
                raise MalformedCatalogError(
                    f"Unexpected status {status} for translations of {language} ({url}).",
                    language=language,
                )
            return response.read().decode("utf-8", errors="replace")
    except urllib.error.HTTPError as exc:
        raise SourceUnavailableError(
            f"Failed to fetch translations for {language}: HTTP {exc.code} ({url}).",
            language=language,
        ) from exc
    except urllib.error.URLError as exc:
        raise SourceUnavailableError(
            f"Failed to fetch translations for {language}: {exc.reason} ({url}).",
            language=language,
        ) from exc
    except TimeoutError as exc:
        raise SourceUnavailableError(
            f"Request for {language} translations timed out ({url}).",
            language=language,
        ) from exc
    except (OSError, http.client.HTTPException) as exc:
        raise SourceUnavailableError(
            f"Failed to fetch translations for {language}: {exc!r} ({url}).",
            language=language,
        ) from exc


def parse_records(payload: Any, *, language: str, url: str) -> tuple[ApiRecord, ...]:
    """Normalize the `[{translationCode, value}]` array into records."""
    if not isinstance(payload, list):
        raise MalformedCatalogError(
            f"Unexpected format for translations of {language}: expected a list ({url}).",
            language=language,
        )
    records: list[ApiRecord] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        code = item.get("translationCode")
        if not isinstance(code, str) or not code:
            continue
        records.append(ApiRecord(code=code, value=item.get("value")))
    return tuple(records)


def fetch_catalog(
    language: str,
    *,
    api_endpoint: str,
    code_format: str,
    mapping: Iterable[LanguageMapping] = (),
    timeout: float = 10.0,
    opener: Opener | None = None,
) -> ApiCatalog:
    """Fetch one language from the API and adapt it into an `ApiCatalog`."""
    code = format_language_code(language, code_format, mapping)
    url = endpoint_for_language(api_endpoint, code)
    raw = _perform_request(
        url,
        language=language,
        timeout=timeout,
        opener=opener or urllib.request.urlopen,
    )
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedCatalogError(
            f"Translations for {language} are not valid JSON ({url}).",
            language=language,
        ) from exc
    records = parse_records(payload, language=language, url=url)
    return ApiCatalog(language=language, records=records, url=url)
