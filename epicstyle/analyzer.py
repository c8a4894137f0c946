"""The analysis engine: reads files, runs the rules and scores the result."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .rules.advanced import (
    CommentFormatRule,
    FileMaxFunctionsRule,
    FunctionCommentRule,
    FunctionParametersRule,
    GlobalVariableRule,
    LoopDeclarationRule,
    VariableDeclarationLocationRule,
)
from .rules.base import FileContext, Rule, RuleSet, Violation
from .rules.basic import (
    EmptyLinesRule,
    FilenameRule,
    FunctionLengthRule,
    FunctionNamingRule,
    IndentationRule,
    LineLengthRule,
    MacroNamingRule,
    VariableDeclarationRule,
)


def _json_number(value: float) -> float | int:
    """Write integral floats without a fractional part, as JSON encoders do."""
    return int(value) if float(value).is_integer() else value


@dataclass
class FileResult:
    """The outcome of analysing one file."""

    filename: str
    violations: list[Violation] = field(default_factory=list)
    score: float = 0.0
    line_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping; no violations is written as null."""
        return {
            "filename": self.filename,
            "violations": [v.to_dict() for v in self.violations] or None,
            "score": _json_number(self.score),
            "line_count": self.line_count,
        }


@dataclass
class AnalyzeResults:
    """Totals over every analysed file."""

    files: list[FileResult] = field(default_factory=list)
    total_score: float = 0.0
    total_files: int = 0
    total_lines: int = 0
    violations: int = 0
    clean_files: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping; no files is written as null."""
        return {
            "files": [f.to_dict() for f in self.files] or None,
            "total_score": _json_number(self.total_score),
            "total_files": self.total_files,
            "total_lines": self.total_lines,
            "total_violations": self.violations,
            "clean_files": self.clean_files,
        }


def read_file(filename: str) -> tuple[str, list[str]]:
    """Return the file's content (each line ending in a newline) and its lines.

    Lines are split on newlines; a single carriage return before a newline
    is dropped, and a final newline does not start an extra empty line.
    """
    with open(filename, "rb") as handle:
        data = handle.read()
    pieces = data.decode("utf-8", "surrogateescape").split("\n")
    if pieces[-1] == "":
        pieces.pop()
    lines = [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]
    content = "".join(line + "\n" for line in lines)
    return content, lines


def calculate_score(line_count: int, violation_count: int) -> float:
    """Score a file from 0 to 100 by its ratio of violations to lines."""
    if line_count == 0:
        return 100.0
    ratio = violation_count / line_count
    score = 100.0 - ratio * 100.0
    return min(max(score, 0.0), 100.0)


def calculate_global_results(results: list[FileResult]) -> AnalyzeResults:
    """Sum up the results of several files; the score is their average."""
    if not results:
        return AnalyzeResults()
    return AnalyzeResults(
        files=list(results),
        total_score=sum(r.score for r in results) / len(results),
        total_files=len(results),
        total_lines=sum(r.line_count for r in results),
        violations=sum(len(r.violations) for r in results),
        clean_files=sum(1 for r in results if not r.violations),
    )


class Analyzer:
    """Runs the full rule set over source files."""

    def __init__(self) -> None:
        self.rule_set = RuleSet()
        for rule in (
            LineLengthRule(),
            EmptyLinesRule(),
            IndentationRule(),
            VariableDeclarationRule(),
            VariableDeclarationLocationRule(),
            FilenameRule(),
            FunctionNamingRule(),
            MacroNamingRule(),
            FunctionLengthRule(),
            FileMaxFunctionsRule(),
            CommentFormatRule(),
            FunctionCommentRule(),
            GlobalVariableRule(),
            FunctionParametersRule(),
            LoopDeclarationRule(),
        ):
            self.rule_set.add(rule)

    def analyze_file(self, filename: str, level: int) -> FileResult:
        """Check one file against every rule up to ``level``."""
        content, lines = read_file(filename)
        ctx = FileContext(
            filename=filename,
            lines=lines,
            content=content,
            is_header=filename.endswith(".h"),
        )
        violations = self.rule_set.check_all(ctx, level)
        return FileResult(
            filename=filename,
            violations=violations,
            score=calculate_score(len(lines), len(violations)),
            line_count=len(lines),
        )

    def rules_for_level(self, level: int) -> list[Rule]:
        """Return the rules that apply at ``level``, in order."""
        return [rule for rule in self.rule_set if rule.level <= level]