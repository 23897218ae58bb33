"""Diagnostic log writer and copyable text report for an analysis run."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .ignore_rules import value_text
from .model import AnalysisResult, DuplicateGroup, MissingTranslationFinding
from .summary import usage_band

LOG_HEADER = "AppCheck Translation Analysis Log"
_RULE = "-" * 63


def _display_path(path: Path, root: Path | None) -> str:
    if root is None:
        return path.as_posix()
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


class TranslationLog:
    """Plain-text log: truncated by `start()`, appended section by section."""

    def __init__(self, path: Path, *, root: Path | None = None) -> None:
        self.path = path
        self._root = root

    def start(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(f"{LOG_HEADER}\n\n", encoding="utf-8")

    def _append(self, lines: list[str]) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write("\n".join(lines) + "\n")

    def append_duplicates(
        self,
        language: str,
        groups: Iterable[DuplicateGroup],
        *,
        remote: bool = False,
    ) -> None:
        groups = list(groups)
        if not groups:
            return
        kind = "API" if remote else "local"
        lines = [f"\nDuplicate values found in {language} {kind} translations:", _RULE]
        for group in groups:
            lines.append(f'  • Value: "{value_text(group.value)}"')
            for key in group.keys:
                lines.append(f'    - Key: "{key}"')
            if group.source:
                lines.append(f"    (source: {group.source})")
        self._append(lines)

    def append_missing_translations(
        self, findings: Iterable[MissingTranslationFinding]
    ) -> None:
        findings = list(findings)
        if not findings:
            return
        lines = ["\nMissing Translations in UI:", _RULE]
        for finding in findings:
            path = _display_path(finding.path, self._root)
            lines.append(f'• {path}, Line {finding.line}: "{finding.text}"')
        self._append(lines)

    def append_unused_keys(self, keys: Iterable[str]) -> None:
        keys = sorted(keys)
        if not keys:
            return
        lines = ["\nUnused translation keys:", _RULE]
        lines.extend(f"  • {key}" for key in keys)
        self._append(lines)


def format_analysis_report(
    result: AnalysisResult, *, log_path: Path | None = None
) -> str:
    lines = ["Analysis Results"]
    lines.append(f"• Total unique translation keys: {len(result.key_universe)}")
    lines.append(f"• Used translation keys: {len(result.usage.used)}")
    lines.append(f"• Unused translation keys: {len(result.usage.unused)}")
    if result.missing_translations:
        lines.append(
            f"• Untranslated UI text candidates: {len(result.missing_translations)}"
        )
    if log_path is not None and (result.usage.unused or result.duplicate_groups):
        lines.append(f"• Details are logged in {log_path.as_posix()}")

    lines.append("")
    lines.append("Language Summary")
    if not result.summaries:
        lines.append("No language could be loaded.")
    for summary in result.summaries:
        pct = summary.usage_percentage
        lines.append(f"• {summary.language.upper()} [{usage_band(pct)}]:")
        lines.append(f"  - Translation Keys: {summary.total_keys}")
        lines.append(f"  - Used Keys: {len(summary.used_keys)}")
        lines.append(f"  - Unused Keys: {len(summary.unused_keys)}")
        lines.append(f"  - Duplicate Values: {summary.duplicate_count}")
        lines.append(f"  - Usage: {pct:.2f}%")
    if result.failures:
        lines.append("")
        lines.append(f"Skipped languages: {len(result.failures)}")
        for failure in result.failures:
            lines.append(f"- {failure.language}: {failure.reason}")
    return "\n".join(lines)
