"""AppCheck-Py – all public symbols are re-exported from .core."""

from importlib import metadata

from .core import (  # noqa: F401 – re-exports
    AnalysisResult,
    LanguageSummary,
    UsageResult,
    analyze_project,
    run_analysis,
)

try:
    __version__ = metadata.version("appcheck-py")
except metadata.PackageNotFoundError:  # editable install before first build
    __version__ = "0.0.0"
