import io
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


class FakeResponse(io.BytesIO):
    """Minimal stand-in for the object `urllib.request.urlopen` returns."""

    def __init__(self, body: bytes, status: int = 200) -> None:
        super().__init__(body)
        self.status = status


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture()
def json_opener() -> Callable[..., Callable[..., FakeResponse]]:
    """Return a factory of fake `urlopen` callables serving JSON per URL."""

    def _factory(
        responses: dict[str, Any], *, status: int = 200, calls: list[str] | None = None
    ) -> Callable[..., FakeResponse]:
        def _open(request: Any, timeout: float | None = None) -> FakeResponse:
            url = request.full_url
            if calls is not None:
                calls.append(url)
            body = responses[url]
            raw = body if isinstance(body, bytes) else json.dumps(body).encode()
            return FakeResponse(raw, status=status)

        return _open

    return _factory


@pytest.fixture()
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Build a project root with config, catalogs and source files."""

    def _make(
        *,
        config: dict[str, Any] | None = None,
        catalogs: dict[str, Any] | None = None,
        sources: dict[str, str] | None = None,
        ignore: str | None = None,
    ) -> Path:
        root = tmp_path / "proj"
        root.mkdir(exist_ok=True)
        cfg = {
            "translationDir": "./i18n",
            "languages": ["en"],
            "projectDirs": ["./src"],
            "translationFunction": "t",
        }
        cfg.update(config or {})
        write_json(root / "appcheck.config.json", cfg)
        for rel, data in (catalogs or {}).items():
            write_json(root / "i18n" / rel, data)
        (root / "src").mkdir(exist_ok=True)
        for rel, text in (sources or {}).items():
            path = root / "src" / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        if ignore is not None:
            (root / ".appcheckignore").write_text(ignore, encoding="utf-8")
        return root

    return _make
