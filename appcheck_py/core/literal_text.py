"""Heuristic, line-oriented detection of UI markup text left untranslated."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from .app_config import DEFAULT_SOURCE_EXTENSIONS
from .model import MissingTranslationFinding
from .project_scanner import CodeCorpus, load_corpus

UI_TAGS = ("div", "span", "p", r"h\d", "Text")
_TAG_GROUP = "|".join(UI_TAGS)
UI_ELEMENT_RE = re.compile(
    rf"<(?:{_TAG_GROUP})(?=[\s/>])[^>]*>([^<>{{}}]+)</(?:{_TAG_GROUP})\s*>"
)
_MEANINGFUL_RE = re.compile(r"\w")


def translation_call_pattern(function_name: str = "t") -> re.Pattern[str]:
    """Match a quoted call to *function_name*, `translate` or `i18n`."""
    names = {re.escape(function_name), "translate", "i18n"}
    return re.compile(rf"(?<![\w$])(?:{'|'.join(sorted(names))})\(['\"]")


def find_line_findings(
    path: Path, text: str, call_re: re.Pattern[str]
) -> list[MissingTranslationFinding]:
    findings: list[MissingTranslationFinding] = []
    for index, line in enumerate(text.splitlines(), start=1):
        for match in UI_ELEMENT_RE.finditer(line):
            content = match.group(1).strip()
            if not content or not _MEANINGFUL_RE.search(content):
                continue
            if call_re.search(content):
                continue
            findings.append(MissingTranslationFinding(path, index, content))
    return findings


def find_corpus_missing_translations(
    corpus: CodeCorpus, *, translation_function: str = "t"
) -> tuple[MissingTranslationFinding, ...]:
    """Scan a loaded corpus, reporting each file path in corpus order."""
    call_re = translation_call_pattern(translation_function)
    by_digest: dict[int, list[MissingTranslationFinding]] = {}
    for source in corpus.unique_texts():
        by_digest[source.digest] = find_line_findings(
            source.path, source.text, call_re
        )
    out: list[MissingTranslationFinding] = []
    for source in corpus.files:
        for finding in by_digest[source.digest]:
            out.append(
                MissingTranslationFinding(source.path, finding.line, finding.text)
            )
    return tuple(out)


def find_missing_translations(
    code_roots: Iterable[Path],
    *,
    translation_function: str = "t",
    extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS,
) -> tuple[MissingTranslationFinding, ...]:
    corpus = load_corpus(code_roots, extensions)
    return find_corpus_missing_translations(
        corpus, translation_function=translation_function
    )
