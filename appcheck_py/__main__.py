"""CLI entry-point for the AppCheck-Py translation analysis."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from appcheck_py import __version__
from appcheck_py.core.analysis import analyze_project
from appcheck_py.core.errors import ConfigurationInvalidError, IgnoreRuleCompileError
from appcheck_py.core.report import format_analysis_report

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="appcheck-py",
        description=(
            "Check translation catalogs for unused keys, duplicate values and "
            "untranslated UI text."
        ),
    )
    parser.add_argument(
        "project",
        nargs="?",
        type=Path,
        default=Path("."),
        help="project root holding appcheck.config.json (default: current directory)",
    )
    parser.add_argument("--config", type=Path, help="explicit configuration file")
    parser.add_argument("--ignore-file", type=Path, help="explicit ignore file")
    parser.add_argument("--log-file", type=Path, help="diagnostic log destination")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    root = args.project.resolve()
    try:
        result, log_path = analyze_project(
            root,
            config_path=args.config,
            ignore_path=args.ignore_file,
            log_path=args.log_file,
        )
    except (
        ConfigurationInvalidError,
        IgnoreRuleCompileError,
        OSError,
        UnicodeDecodeError,
    ) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    print(format_analysis_report(result, log_path=log_path))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
