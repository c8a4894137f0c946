"""Core types shared by all style rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass
class Violation:
    """A single breach of a style rule."""

    rule: str
    message: str
    line: int
    severity: str
    column: int = 0
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping, leaving out an empty column and description."""
        data: dict[str, Any] = {
            "rule": self.rule,
            "message": self.message,
            "line": self.line,
        }
        if self.column:
            data["column"] = self.column
        data["severity"] = self.severity
        if self.description:
            data["description"] = self.description
        return data


@dataclass
class FileContext:
    """What a rule gets to see of the file under analysis."""

    filename: str
    lines: list[str] = field(default_factory=list)
    content: str = ""
    is_header: bool = False


class Rule(ABC):
    """A style rule: a code name, a description, a level (1 = base, 2 = advanced)."""

    name: str = ""
    description: str = ""
    level: int = 1

    @abstractmethod
    def check(self, ctx: FileContext) -> list[Violation]:
        """Return the violations found in the file."""


class RuleSet:
    """An ordered collection of rules."""

    def __init__(self) -> None:
        self._rules: list[Rule] = []

    def add(self, rule: Rule) -> None:
        """Append a rule to the set."""
        self._rules.append(rule)

    def check_all(self, ctx: FileContext, level: int) -> list[Violation]:
        """Run every rule whose level is at most ``level``, in insertion order."""
        violations: list[Violation] = []
        for rule in self._rules:
            if rule.level <= level:
                violations.extend(rule.check(ctx))
        return violations

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)