"""Cross-reference catalog keys against literal translation calls in code."""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Iterable
from pathlib import Path

from .app_config import DEFAULT_SOURCE_EXTENSIONS
from .model import KeyReference, UsageResult
from .project_scanner import CodeCorpus, load_corpus

# identifier characters that would make `t(` part of a longer name like `split(`
_NOT_AFTER_IDENT = r"(?<![\w$])"


def call_pattern(key: str, function_name: str) -> re.Pattern[str]:
    """Return the per-key expression for `fn("key")` / `fn('key')`."""
    fn = re.escape(function_name)
    escaped = re.escape(key)
    return re.compile(
        rf"{_NOT_AFTER_IDENT}{fn}\((?:\"{escaped}\"|'{escaped}')\)"
    )


def call_site_pattern(function_name: str) -> re.Pattern[str]:
    """Return one expression capturing every quoted literal passed to *fn*.

    Equivalent to testing `call_pattern` for each key, in a single pass.
    """
    fn = re.escape(function_name)
    return re.compile(
        rf"{_NOT_AFTER_IDENT}{fn}\((?:\"([^\"\r\n]*)\"|'([^'\r\n]*)')\)"
    )


def _line_starts(text: str) -> list[int]:
    starts = [0]
    starts.extend(match.end() for match in re.finditer(r"\n", text))
    return starts


def scan_corpus_usage(
    corpus: CodeCorpus, keys: Iterable[str], function_name: str
) -> UsageResult:
    """Split *keys* into used and unused against an already loaded corpus."""
    universe = frozenset(keys)
    pattern = call_site_pattern(function_name)
    paths_by_digest = corpus.paths_by_digest()
    references: dict[str, list[KeyReference]] = {}

    for source in corpus.unique_texts():
        starts: list[int] | None = None
        for match in pattern.finditer(source.text):
            literal = match.group(1)
            if literal is None:
                literal = match.group(2)
            if literal not in universe:
                continue
            if starts is None:
                starts = _line_starts(source.text)
            line = bisect_right(starts, match.start())
            for path in paths_by_digest[source.digest]:
                references.setdefault(literal, []).append(KeyReference(path, line))

    used = frozenset(references)
    return UsageResult(
        used=used,
        unused=universe - used,
        references={key: tuple(refs) for key, refs in references.items()},
    )


def scan_usage(
    code_roots: Iterable[Path],
    keys: Iterable[str],
    function_name: str,
    *,
    extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS,
) -> UsageResult:
    """Read the corpus under *code_roots* and scan it for key usage."""
    corpus = load_corpus(code_roots, extensions)
    return scan_corpus_usage(corpus, keys, function_name)
