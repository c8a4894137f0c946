import io
import json

import pytest

from epicstyle.analyzer import FileResult
from epicstyle.reporter import Reporter, progress_bar, score_message, severity_icon
from epicstyle.rules.base import Violation


def _violation(rule="C-O1", message="Nom de fichier non conforme au snake_case", description=""):
    return Violation(rule=rule, message=message, line=1, severity="major", description=description)


def _run(results, **kwargs):
    stream = io.StringIO()
    Reporter(stream=stream, **kwargs).generate(results)
    return stream.getvalue()


def test_progress_bar_full():
    assert progress_bar(100.0) == "[" + "█" * 50 + "] 100.0%"


def test_progress_bar_empty():
    assert progress_bar(0.0) == "[" + "░" * 50 + "] 0.0%"


@pytest.mark.parametrize("percentage, cell", [(90.0, "█"), (70.0, "▓"), (30.0, "▒")])
def test_progress_bar_cells(percentage, cell):
    bar = progress_bar(percentage)
    inner = bar[1:bar.index("]")]
    assert len(inner) == 50
    assert set(inner) <= {cell, "░"}
    assert inner.count(cell) == int(percentage * 50 / 100)


def test_progress_bar_nan():
    assert progress_bar(float("nan")).endswith("] NaN%")


def test_severity_icons():
    assert severity_icon("major") == "🚨"
    assert severity_icon("minor") == "⚠️ "
    assert severity_icon("info") == "ℹ️ "
    assert severity_icon("other") == "❓"


@pytest.mark.parametrize(
    "score, message",
    [
        (100.0, "🏆 EXCELLENT! Code parfaitement conforme!"),
        (95.0, "🏆 EXCELLENT! Code parfaitement conforme!"),
        (85.0, "🎉 TRÈS BIEN! Quelques petits détails à corriger."),
        (70.0, "👍 BIEN! Bon travail, continuez les améliorations."),
        (50.0, "⚠️  MOYEN. Plusieurs points à améliorer."),
        (49.9, "❌ INSUFFISANT. Révision majeure nécessaire."),
    ],
)
def test_score_message(score, message):
    assert score_message(score) == message


def test_silent_writes_nothing():
    results = [FileResult("dir/a.c", [_violation()], 50.0, 2)]
    assert _run(results, silent=True, json_output=True) == ""


def test_json_report_round_trip():
    results = [
        FileResult("a.c", [], 100.0, 3),
        FileResult("b.c", [_violation()], 75.0, 4),
    ]
    data = json.loads(_run(results, json_output=True))
    assert data["total_files"] == 2
    assert data["clean_files"] == 1
    assert data["total_violations"] == 1
    assert data["total_lines"] == 7
    assert data["files"][0]["violations"] is None
    assert data["files"][1]["violations"][0]["rule"] == "C-O1"


def test_json_escapes_html_characters():
    results = [FileResult("a.c", [_violation(message="a<b & c>d")], 0.0, 1)]
    text = _run(results, json_output=True)
    assert "\\u003c" in text and "\\u0026" in text and "\\u003e" in text
    assert json.loads(text)["files"][0]["violations"][0]["message"] == "a<b & c>d"


def test_json_empty_results():
    data = json.loads(_run([], json_output=True))
    assert data["files"] is None
    assert data["total_files"] == 0


def test_text_report_lists_files():
    results = [
        FileResult("some/dir/good.c", [], 100.0, 3),
        FileResult("other/bad.c", [_violation()], 75.0, 4),
    ]
    text = _run(results)
    assert "✅ good.c (100.0% - 3 lignes)" in text
    assert "❌ bad.c (75.0% - 4 lignes - 1 violations)" in text
    assert "   • Fichiers propres: 1/2" in text
    assert "🔸" not in text
    assert score_message(87.5) in text


def test_text_report_verbose_groups_by_rule():
    violations = [
        _violation(rule="C-L1", message="Ligne trop longue", description="trop"),
        _violation(rule="C-L1", message="Ligne trop longue"),
        _violation(rule="C-L3", message="espaces"),
    ]
    text = _run([FileResult("x.c", violations, 0.0, 3)], verbose=True)
    assert "   🔸 C-L1 (2 violations)" in text
    assert "   🔸 C-L3 (1 violations)" in text
    assert "      🚨 Ligne 1: Ligne trop longue" in text
    assert text.count("💡") == 1
    assert text.index("C-L1 (2") < text.index("C-L3 (1")


def test_text_report_empty_results():
    text = _run([])
    assert "   • Propreté: NaN% " in text
    assert "SCORE GLOBAL: 0.0%" in text
    assert score_message(0.0) in text


def test_text_report_box_lines():
    text = _run([FileResult("a.c", [], 100.0, 1)])
    lines = text.splitlines()
    assert lines[0] == "╔" + "═" * 78 + "╗"
    assert lines[2] == "╚" + "═" * 78 + "╝"
    assert lines[-1] == lines[2]
    assert "EPICSTYLE - RAPPORT D'ANALYSE" in lines[1]


def test_generate_defaults_to_stdout(capsys):
    Reporter(json_output=True).generate([FileResult("a.c", [], 100.0, 1)])
    data = json.loads(capsys.readouterr().out)
    assert data["files"][0]["filename"] == "a.c"