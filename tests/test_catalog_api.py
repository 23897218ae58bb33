"""Tests for the remote catalog client."""

from __future__ import annotations

import http.client
import io
import urllib.error

import pytest

from appcheck_py.core import catalog_api
from appcheck_py.core.app_config import AppConfig, LanguageMapping
from appcheck_py.core.catalog_loader import load_catalog
from appcheck_py.core.errors import MalformedCatalogError, SourceUnavailableError
from appcheck_py.core.model import ApiCatalog

_ENDPOINT = "https://api.example.org/translations/"


def test_format_language_code_expands_underscore_format() -> None:
    """Build `{code}_{CODE}` only when the mapped code has no underscore."""
    assert catalog_api.format_language_code("en", "en_US") == "en_EN"
    assert catalog_api.format_language_code("pt_BR", "en_US") == "pt_BR"
    assert catalog_api.format_language_code("en", "en-US") == "en"
    assert catalog_api.format_language_code("en", "en") == "en"


def test_format_language_code_prefers_first_mapping() -> None:
    """Use the first alternate code declared for the language."""
    mapping = (
        LanguageMapping("fr", ("fr_CA",)),
        LanguageMapping("no", ("nb_NO", "nn_NO")),
        LanguageMapping("de", ()),
    )
    assert catalog_api.format_language_code("no", "en_US", mapping) == "nb_NO"
    assert catalog_api.format_language_code("de", "en_US", mapping) == "de_DE"
    assert catalog_api.format_language_code("no", "en", mapping) == "nb_NO"


def test_fetch_catalog_builds_records_from_array(json_opener) -> None:  # type: ignore[no-untyped-def]
    """Adapt `{translationCode, value}` records and skip malformed entries."""
    calls: list[str] = []
    opener = json_opener(
        {
            f"{_ENDPOINT}en_EN": [
                {"translationCode": "home.title", "value": "Home"},
                {"translationCode": "", "value": "blank"},
                {"value": "no code"},
                "not a record",
                {"translationCode": "nav.home", "value": "Home"},
            ]
        },
        calls=calls,
    )
    catalog = catalog_api.fetch_catalog(
        "en", api_endpoint=_ENDPOINT, code_format="en_US", opener=opener
    )
    assert calls == [f"{_ENDPOINT}en_EN"]
    assert isinstance(catalog, ApiCatalog)
    assert catalog.language == "en"
    assert catalog.leaves() == {"home.title": "Home", "nav.home": "Home"}
    assert catalog.source_label == f"{_ENDPOINT}en_EN"


def test_fetch_catalog_rejects_non_list_body(json_opener) -> None:  # type: ignore[no-untyped-def]
    """Treat an object body as a malformed catalog for that language."""
    opener = json_opener({f"{_ENDPOINT}en": {"home": "Home"}})
    with pytest.raises(MalformedCatalogError, match="expected a list") as info:
        catalog_api.fetch_catalog(
            "en", api_endpoint=_ENDPOINT, code_format="en", opener=opener
        )
    assert info.value.language == "en"


def test_fetch_catalog_rejects_invalid_json(json_opener) -> None:  # type: ignore[no-untyped-def]
    """Treat an unparsable body as malformed."""
    opener = json_opener({f"{_ENDPOINT}en": b"<html>oops</html>"})
    with pytest.raises(MalformedCatalogError, match="not valid JSON"):
        catalog_api.fetch_catalog(
            "en", api_endpoint=_ENDPOINT, code_format="en", opener=opener
        )


def test_fetch_catalog_rejects_non_200_status(json_opener) -> None:  # type: ignore[no-untyped-def]
    """Fail the language when the server answers with another 2xx status."""
    opener = json_opener({f"{_ENDPOINT}en": []}, status=204)
    with pytest.raises(MalformedCatalogError, match="Unexpected status 204"):
        catalog_api.fetch_catalog(
            "en", api_endpoint=_ENDPOINT, code_format="en", opener=opener
        )


def test_http_and_network_errors_are_source_unavailable() -> None:
    """Map HTTP, network and timeout failures to SourceUnavailableError."""
    url = f"{_ENDPOINT}fr"

    def _http_error(request, timeout=None):  # type: ignore[no-untyped-def]
        raise urllib.error.HTTPError(url, 404, "Not Found", None, None)  # type: ignore[arg-type]

    def _offline(request, timeout=None):  # type: ignore[no-untyped-def]
        raise urllib.error.URLError("connection refused")

    def _timeout(request, timeout=None):  # type: ignore[no-untyped-def]
        raise TimeoutError("timed out")

    with pytest.raises(SourceUnavailableError, match="HTTP 404"):
        catalog_api.fetch_catalog(
            "fr", api_endpoint=_ENDPOINT, code_format="en", opener=_http_error
        )
    with pytest.raises(SourceUnavailableError, match="connection refused"):
        catalog_api.fetch_catalog(
            "fr", api_endpoint=_ENDPOINT, code_format="en", opener=_offline
        )
    with pytest.raises(SourceUnavailableError, match="timed out"):
        catalog_api.fetch_catalog(
            "fr", api_endpoint=_ENDPOINT, code_format="en", opener=_timeout
        )


def test_errors_while_reading_the_body_are_source_unavailable() -> None:
    """Map failures raised by `read()` to SourceUnavailableError."""

    class _Truncated(io.BytesIO):
        def read(self, *args: object) -> bytes:
            raise http.client.IncompleteRead(b"[{")

    def _opener(request, timeout=None):  # type: ignore[no-untyped-def]
        return _Truncated(b"")

    with pytest.raises(SourceUnavailableError, match="IncompleteRead"):
        catalog_api.fetch_catalog(
            "fr", api_endpoint=_ENDPOINT, code_format="en", opener=_opener
        )


def test_load_catalog_passes_timeout_and_prefers_api(tmp_path, json_opener) -> None:  # type: ignore[no-untyped-def]
    """Use the API when configured, with the configured request timeout."""
    seen: dict[str, float] = {}
    inner = json_opener({f"{_ENDPOINT}nb_NO": [{"translationCode": "a", "value": "A"}]})

    def _opener(request, timeout=None):  # type: ignore[no-untyped-def]
        seen["timeout"] = timeout
        return inner(request, timeout=timeout)

    cfg = AppConfig(
        languages=("no",),
        project_dirs=(),
        translation_dir=tmp_path,
        api_endpoint=_ENDPOINT,
        language_mapping=(LanguageMapping("no", ("nb_NO",)),),
        request_timeout=3.5,
    )
    catalog = load_catalog("no", cfg, opener=_opener)
    assert isinstance(catalog, ApiCatalog)
    assert catalog.leaves() == {"a": "A"}
    assert seen["timeout"] == 3.5
