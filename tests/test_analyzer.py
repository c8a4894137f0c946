import pytest

from epicstyle.analyzer import (
    AnalyzeResults,
    Analyzer,
    FileResult,
    calculate_global_results,
    calculate_score,
    read_file,
)
from epicstyle.rules.base import Violation

CLEAN_SOURCE = "int main(void)\n{\n\treturn (0);\n}\n"


def _violation(rule="C-L1"):
    return Violation(rule=rule, message="m", line=1, severity="major")


def test_read_file_splits_lines_and_rebuilds_content(tmp_path):
    path = tmp_path / "a.c"
    path.write_bytes(b"one\r\ntwo\nthree")
    content, lines = read_file(str(path))
    assert lines == ["one", "two", "three"]
    assert content == "one\ntwo\nthree\n"


def test_read_file_trailing_newline_adds_no_line(tmp_path):
    path = tmp_path / "a.c"
    path.write_bytes(b"x\n\n")
    content, lines = read_file(str(path))
    assert lines == ["x", ""]
    assert content == "x\n\n"


def test_read_file_empty(tmp_path):
    path = tmp_path / "a.c"
    path.write_bytes(b"")
    assert read_file(str(path)) == ("", [])


def test_read_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file(str(tmp_path / "nope.c"))


def test_score_no_lines_is_full():
    assert calculate_score(0, 5) == 100.0


def test_score_clamped_at_zero():
    assert calculate_score(3, 10) == 0.0


def test_score_without_violations_is_full():
    assert calculate_score(42, 0) == 100.0


def test_score_decreases_with_violations():
    scores = [calculate_score(20, n) for n in range(0, 25)]
    assert scores == sorted(scores, reverse=True)
    assert all(0.0 <= s <= 100.0 for s in scores)


def test_score_ratio():
    assert calculate_score(4, 1) == 75.0


def test_global_results_empty():
    result = calculate_global_results([])
    assert result == AnalyzeResults()
    assert result.to_dict()["files"] is None
    assert result.to_dict()["total_score"] == 0


def test_global_results_totals():
    first = FileResult("a.c", [], 100.0, 10)
    second = FileResult("b.c", [_violation(), _violation()], 50.0, 4)
    result = calculate_global_results([first, second])
    assert result.files == [first, second]
    assert result.total_files == 2
    assert result.total_lines == 14
    assert result.violations == 2
    assert result.clean_files == 1
    assert result.total_score == (100.0 + 50.0) / 2


def test_file_result_to_dict():
    clean = FileResult("a.c", [], 100.0, 3).to_dict()
    assert clean == {"filename": "a.c", "violations": None, "score": 100, "line_count": 3}
    dirty = FileResult("b.c", [_violation()], 87.5, 8).to_dict()
    assert dirty["violations"] == [_violation().to_dict()]
    assert dirty["score"] == 87.5


def test_analyze_clean_file(tmp_path):
    path = tmp_path / "clean_file.c"
    path.write_text(CLEAN_SOURCE)
    analyzer = Analyzer()
    for level in (1, 2):
        result = analyzer.analyze_file(str(path), level)
        assert result.violations == []
        assert result.score == 100.0
        assert result.line_count == 4
        assert result.filename == str(path)


def test_analyze_bad_filename(tmp_path):
    path = tmp_path / "BadName.c"
    path.write_text(CLEAN_SOURCE)
    result = Analyzer().analyze_file(str(path), 1)
    assert [v.rule for v in result.violations] == ["C-O1"]
    assert result.score == calculate_score(4, 1)


def test_level_filters_advanced_rules(tmp_path):
    path = tmp_path / "commented.c"
    path.write_text("int main(void)\n{\n\treturn (0); // done\n}\n")
    analyzer = Analyzer()
    assert "C-C1" not in {v.rule for v in analyzer.analyze_file(str(path), 1).violations}
    assert "C-C1" in {v.rule for v in analyzer.analyze_file(str(path), 2).violations}


def test_rules_for_level():
    analyzer = Analyzer()
    level_one = analyzer.rules_for_level(1)
    level_two = analyzer.rules_for_level(2)
    assert len(level_one) == 10
    assert len(level_two) == len(analyzer.rule_set)
    assert all(rule.level == 1 for rule in level_one)
    assert [r.name for r in level_two[:5]] == ["C-L1", "C-L2", "C-L3", "C-L4", "C-V1"]
    assert analyzer.rules_for_level(0) == []


def test_analyze_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Analyzer().analyze_file(str(tmp_path / "missing.c"), 1)