"""Test module for untranslated UI text detection."""

from __future__ import annotations

from pathlib import Path

from appcheck_py.core.literal_text import (
    find_line_findings,
    find_missing_translations,
    translation_call_pattern,
)
from appcheck_py.core.model import MissingTranslationFinding


def _findings(text: str, fn: str = "t") -> list[tuple[int, str]]:
    found = find_line_findings(Path("x.jsx"), text, translation_call_pattern(fn))
    return [(f.line, f.text) for f in found]


def test_literal_text_in_known_tags_is_reported() -> None:
    """Verify plain text inside div/span/p/h*/Text tags is flagged."""
    text = (
        "<div>Welcome back</div>\n"
        '<span className="x"> Save </span>\n'
        "<h2>Settings</h2>\n"
        "<Text style={styles.title}>Hello</Text>\n"
    )
    assert _findings(text) == [
        (1, "Welcome back"),
        (2, "Save"),
        (3, "Settings"),
        (4, "Hello"),
    ]


def test_expressions_and_nested_tags_are_not_literal_text() -> None:
    """Verify braces or nested markup exclude the match."""
    text = (
        "<div>{t('home.title')}</div>\n"
        "<p>Hello <b>you</b></p>\n"
        "<span>{count}</span>\n"
    )
    assert _findings(text) == []


def test_text_without_word_characters_is_skipped() -> None:
    """Verify punctuation-only content is not a finding."""
    assert _findings("<span> - </span>\n<p>…</p>\n") == []


def test_translation_calls_inside_text_are_not_reported() -> None:
    """Verify t(, translate( and i18n( calls with a quote suppress the finding."""
    text = (
        "<p>t('a.b')</p>\n"
        '<p>translate("x")</p>\n'
        "<p>i18n('y')</p>\n"
        '<p>tr("z")</p>\n'
    )
    assert _findings(text, fn="tr") == []
    assert _findings('<p>tr("z")</p>', fn="t") == [(1, 'tr("z")')]


def test_unlisted_tags_and_multiline_blocks_are_ignored() -> None:
    """Verify other tags and text spanning lines are outside the heuristic."""
    text = "<button>Click</button>\n<pre>raw</pre>\n<div>\n  Multi line\n</div>\n"
    assert _findings(text) == []


def test_find_missing_translations_walks_code_roots(tmp_path: Path) -> None:
    """Verify findings carry the file path and line for each source file."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.jsx").write_text("const A = () => <div>Hi</div>;\n", encoding="utf-8")
    (src / "b.jsx").write_text("const A = () => <div>Hi</div>;\n", encoding="utf-8")
    (src / "c.css").write_text("<div>Hi</div>\n", encoding="utf-8")
    assert find_missing_translations([src]) == (
        MissingTranslationFinding(src / "a.jsx", 1, "Hi"),
        MissingTranslationFinding(src / "b.jsx", 1, "Hi"),
    )
