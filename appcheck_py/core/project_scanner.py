"""Code-corpus discovery and one-pass loading for the usage/literal scanners."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

import xxhash

from .app_config import DEFAULT_SOURCE_EXTENSIONS

_log = logging.getLogger(__name__)

_SKIP_DIRS = frozenset({"node_modules", ".git"})


@dataclass(frozen=True, slots=True)
class SourceFile:
    path: Path
    text: str
    digest: int


@dataclass(frozen=True, slots=True)
class CodeCorpus:
    files: tuple[SourceFile, ...]

    def unique_texts(self) -> Iterator[SourceFile]:
        """Yield the first file of every distinct content digest."""
        seen: set[int] = set()
        for source in self.files:
            if source.digest in seen:
                continue
            seen.add(source.digest)
            yield source

    def paths_by_digest(self) -> dict[int, tuple[Path, ...]]:
        out: dict[int, list[Path]] = {}
        for source in self.files:
            out.setdefault(source.digest, []).append(source.path)
        return {digest: tuple(paths) for digest, paths in out.items()}


def _hash_bytes(data: bytes) -> int:
    return int(xxhash.xxh64(data).intdigest())


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield files under *root*, never descending into vendored directories."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if name not in _SKIP_DIRS]
        base = Path(dirpath)
        for name in filenames:
            yield base / name


def list_source_files(
    roots: Iterable[Path], extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS
) -> list[Path]:
    """Return source files under *roots* whose suffix is in *extensions*.

    Missing roots are skipped with a warning; results are sorted per root.
    """
    allowed = {ext.lower() for ext in extensions}
    out: list[Path] = []
    seen: set[Path] = set()
    for root in roots:
        if root.is_file():
            candidates = [root]
        elif root.is_dir():
            candidates = sorted(_walk_files(root))
        else:
            _log.warning("Project directory does not exist: %s", root)
            continue
        for path in candidates:
            if path.suffix.lower() not in allowed or not path.is_file():
                continue
            resolved = path.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            out.append(path)
    return out


def load_corpus(
    roots: Iterable[Path], extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS
) -> CodeCorpus:
    """Read every source file once; unreadable files are logged and skipped."""
    files: list[SourceFile] = []
    for path in list_source_files(roots, extensions):
        try:
            raw = path.read_bytes()
        except OSError as exc:
            _log.warning("Cannot read %s: %s", path, exc)
            continue
        text = raw.decode("utf-8", errors="replace")
        files.append(SourceFile(path=path, text=text, digest=_hash_bytes(raw)))
    return CodeCorpus(tuple(files))
