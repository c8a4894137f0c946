"""Text and JSON reports of analysis results."""

from __future__ import annotations

import json
import math
import os
import sys
from typing import TextIO

from .analyzer import AnalyzeResults, FileResult, calculate_global_results
from .rules.base import Violation

_BAR_LENGTH = 50
_BOX_WIDTH = 78
_TOP = "╔" + "═" * _BOX_WIDTH + "╗"
_BOTTOM = "╚" + "═" * _BOX_WIDTH + "╝"
_TITLE = "║" + " " * 28 + "EPICSTYLE - RAPPORT D'ANALYSE" + " " * 21 + "║"

_SEVERITY_ICONS = {
    "major": "🚨",
    "minor": "⚠️ ",
    "info": "ℹ️ ",
}

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _pct(value: float) -> str:
    return "NaN" if math.isnan(value) else f"{value:.1f}"


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def progress_bar(percentage: float) -> str:
    """Render a 50-cell bar followed by the percentage."""
    filled = 0 if math.isnan(percentage) else int(percentage * _BAR_LENGTH / 100)
    filled = max(0, min(filled, _BAR_LENGTH))
    if percentage >= 80:
        cell = "█"
    elif percentage >= 60:
        cell = "▓"
    else:
        cell = "▒"
    return "[" + cell * filled + "░" * (_BAR_LENGTH - filled) + f"] {_pct(percentage)}%"


def severity_icon(severity: str) -> str:
    """Return the icon shown for a severity."""
    return _SEVERITY_ICONS.get(severity, "❓")


def score_message(score: float) -> str:
    """Return the verdict shown for a global score."""
    if score >= 95:
        return "🏆 EXCELLENT! Code parfaitement conforme!"
    if score >= 85:
        return "🎉 TRÈS BIEN! Quelques petits détails à corriger."
    if score >= 70:
        return "👍 BIEN! Bon travail, continuez les améliorations."
    if score >= 50:
        return "⚠️  MOYEN. Plusieurs points à améliorer."
    return "❌ INSUFFISANT. Révision majeure nécessaire."


class Reporter:
    """Writes analysis results as a text report or as JSON."""

    def __init__(
        self,
        json_output: bool = False,
        verbose: bool = False,
        silent: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self.json_output = json_output
        self.verbose = verbose
        self.silent = silent
        self.stream = stream

    def generate(self, results: list[FileResult]) -> None:
        """Write the report for ``results``; nothing at all when silent."""
        if self.silent:
            return
        out = self.stream if self.stream is not None else sys.stdout
        global_results = calculate_global_results(results)
        if self.json_output:
            self._write_json(global_results, out)
        else:
            self._write_text(global_results, out)

    def _write_json(self, results: AnalyzeResults, out: TextIO) -> None:
        text = json.dumps(results.to_dict(), indent=2, ensure_ascii=False)
        for char, escape in _JSON_ESCAPES.items():
            text = text.replace(char, escape)
        text = text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
        print(text, file=out)

    def _write_text(self, results: AnalyzeResults, out: TextIO) -> None:
        print(_TOP, file=out)
        print(_TITLE, file=out)
        print(_BOTTOM, file=out)
        print(file=out)
        self._write_summary(results, out)
        print(file=out)
        for file_result in results.files:
            self._write_file_result(file_result, out)
        self._write_final_score(results, out)

    def _write_summary(self, results: AnalyzeResults, out: TextIO) -> None:
        print("📊 RÉSUMÉ GLOBAL", file=out)
        print(f"   • Fichiers analysés: {results.total_files}", file=out)
        print(f"   • Lignes de code: {results.total_lines}", file=out)
        print(f"   • Violations totales: {results.violations}", file=out)
        print(
            f"   • Fichiers propres: {results.clean_files}/{results.total_files}",
            file=out,
        )
        if results.total_files:
            clean = results.clean_files / results.total_files * 100
        else:
            clean = math.nan
        print(f"   • Propreté: {_pct(clean)}% {progress_bar(clean)}", file=out)

    def _write_file_result(self, result: FileResult, out: TextIO) -> None:
        name = os.path.basename(result.filename)
        if not result.violations:
            print(
                f"✅ {name} ({_pct(result.score)}% - {result.line_count} lignes)",
                file=out,
            )
            return
        print(
            f"❌ {name} ({_pct(result.score)}% - {result.line_count} lignes"
            f" - {len(result.violations)} violations)",
            file=out,
        )
        if not self.verbose:
            return

        by_rule: dict[str, list[Violation]] = {}
        for violation in result.violations:
            by_rule.setdefault(violation.rule, []).append(violation)
        for rule, violations in by_rule.items():
            print(f"   🔸 {rule} ({len(violations)} violations)", file=out)
            for violation in violations:
                icon = severity_icon(violation.severity)
                print(
                    f"      {icon} Ligne {violation.line}: {violation.message}",
                    file=out,
                )
                if violation.description:
                    print(f"         💡 {violation.description}", file=out)
        print(file=out)

    def _write_final_score(self, results: AnalyzeResults, out: TextIO) -> None:
        score_text = f"SCORE GLOBAL: {_pct(results.total_score)}%"
        padding = max(79 - _byte_len(score_text) - 27, 0)
        print(_TOP, file=out)
        print("║" + " " * 27 + score_text + " " * padding + "║", file=out)
        print("║ " + progress_bar(results.total_score) + " ║", file=out)

        message = score_message(results.total_score)
        width = _byte_len(message)
        left = max((_BOX_WIDTH - width) // 2, 0)
        right = max(_BOX_WIDTH - width - left, 0)
        print("║" + " " * left + message + " " * right + "║", file=out)
        print(_BOTTOM, file=out)