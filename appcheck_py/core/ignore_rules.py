"""Ignore-rule parsing for `.appcheckignore` files and the (key, value) predicate."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import IgnoreRuleCompileError

_log = logging.getLogger(__name__)

IGNORE_FILENAME = ".appcheckignore"

SECTION_KEYS = "keys"
SECTION_PREFIXES = "prefixes"
SECTION_SUFFIXES = "suffixes"
SECTION_PATTERNS = "patterns"
SECTION_KEYS_WITH_NUMBERS = "keysWithNumbers"
KNOWN_SECTIONS = (
    SECTION_KEYS,
    SECTION_PREFIXES,
    SECTION_SUFFIXES,
    SECTION_PATTERNS,
    SECTION_KEYS_WITH_NUMBERS,
)
_FALSE_FLAGS = {"false", "no", "0", "off"}
_DIGIT_RE = re.compile(r"\d")


class IgnorePredicate(Protocol):
    def matches(self, key: str, value: object) -> bool: ...


def value_text(value: object) -> str:
    """Render a leaf value the way pattern rules see it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True, slots=True)
class ExactKeyRule:
    """Match listed keys; an entry ending in `*` matches by prefix."""

    entries: tuple[str, ...]

    def matches(self, key: str, value: object) -> bool:
        for entry in self.entries:
            if key == entry:
                return True
            if entry.endswith("*") and key.startswith(entry[:-1]):
                return True
        return False


@dataclass(frozen=True, slots=True)
class PrefixRule:
    prefixes: tuple[str, ...]

    def matches(self, key: str, value: object) -> bool:
        return key.startswith(self.prefixes)


@dataclass(frozen=True, slots=True)
class SuffixRule:
    suffixes: tuple[str, ...]

    def matches(self, key: str, value: object) -> bool:
        return key.endswith(self.suffixes)


@dataclass(frozen=True, slots=True)
class ValuePatternRule:
    patterns: tuple[re.Pattern[str], ...]

    def matches(self, key: str, value: object) -> bool:
        text = value_text(value)
        return any(pattern.search(text) for pattern in self.patterns)


@dataclass(frozen=True, slots=True)
class DigitKeyRule:
    def matches(self, key: str, value: object) -> bool:
        return _DIGIT_RE.search(key) is not None


@dataclass(frozen=True, slots=True)
class IgnoreRules:
    """Ordered predicates; a pair is ignored when any predicate matches."""

    predicates: tuple[IgnorePredicate, ...] = ()
    source: Path | None = None

    @classmethod
    def empty(cls) -> IgnoreRules:
        return cls()

    def __bool__(self) -> bool:
        return bool(self.predicates)

    def should_ignore(self, key: str, value: object) -> bool:
        return any(predicate.matches(key, value) for predicate in self.predicates)

    def extended(self, *predicates: IgnorePredicate) -> IgnoreRules:
        return IgnoreRules(self.predicates + tuple(predicates), self.source)


def should_ignore(key: str, value: object, rules: IgnoreRules) -> bool:
    """Return whether the (key, value) pair is excluded from usage analysis."""
    return rules.should_ignore(key, value)


def compile_patterns(
    patterns: Iterable[str], *, source: str = IGNORE_FILENAME
) -> tuple[re.Pattern[str], ...]:
    """Compile value patterns, failing fast on the first invalid expression."""
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise IgnoreRuleCompileError(
                f"Invalid ignore pattern {pattern!r} in {source}: {exc}",
                pattern=pattern,
            ) from exc
    return tuple(compiled)


def _parse_sections(text: str) -> dict[str, list[str]]:
    sections: dict[str, list[str]] = {}
    current: str | None = None
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        head, sep, rest = line.partition(":")
        head = head.strip()
        rest = rest.strip()
        if head in KNOWN_SECTIONS:
            current = head
            values = sections.setdefault(head, [])
            if rest:
                values.append(rest)
            continue
        if current is None:
            # a bare name outside any section is a boolean flag
            sections.setdefault(head if sep else line, [])
            continue
        sections[current].append(line)
    return sections


def _flag_enabled(values: list[str]) -> bool:
    if not values:
        return True
    return values[-1].strip().lower() not in _FALSE_FLAGS


def parse_ignore_rules(text: str, *, source: Path | None = None) -> IgnoreRules:
    """Parse ignore-file text into an ordered predicate list."""
    label = source.as_posix() if source is not None else IGNORE_FILENAME
    sections = _parse_sections(text)
    for name in sections:
        if name not in KNOWN_SECTIONS:
            _log.warning("Unknown section %r in %s ignored", name, label)

    predicates: list[IgnorePredicate] = []
    if sections.get(SECTION_KEYS):
        predicates.append(ExactKeyRule(tuple(sections[SECTION_KEYS])))
    if sections.get(SECTION_PREFIXES):
        predicates.append(PrefixRule(tuple(sections[SECTION_PREFIXES])))
    if sections.get(SECTION_SUFFIXES):
        predicates.append(SuffixRule(tuple(sections[SECTION_SUFFIXES])))
    if sections.get(SECTION_PATTERNS):
        patterns = compile_patterns(sections[SECTION_PATTERNS], source=label)
        predicates.append(ValuePatternRule(patterns))
    if SECTION_KEYS_WITH_NUMBERS in sections and _flag_enabled(
        sections[SECTION_KEYS_WITH_NUMBERS]
    ):
        predicates.append(DigitKeyRule())
    return IgnoreRules(tuple(predicates), source)


def load_ignore_rules(path: Path) -> IgnoreRules:
    """Load rules from *path*; a missing file ignores nothing."""
    if not path.is_file():
        _log.info("%s not found, continuing without restrictions.", path.name)
        return IgnoreRules.empty()
    rules = parse_ignore_rules(path.read_text(encoding="utf-8-sig"), source=path)
    _log.info("%s found and applied.", path.name)
    return rules
