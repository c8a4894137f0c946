"""Base (level 1) style rules: layout and naming."""

from __future__ import annotations

import os
import re
import unicodedata

from .base import FileContext, Rule, Violation

_TYPES = r"(int|char|float|double|long|short|unsigned)"
_MULTI_DECL_RE = re.compile(r"^\s*" + _TYPES + r"\s+\w+\s*,\s*\w+", re.ASCII)
_FUNC_NAME_RE = re.compile(r"^\s*\w+\s+(\w+)\s*\(", re.ASCII)
_FUNC_DEF_RE = re.compile(r"^\s*\w+\s+(\w+)\s*\([^)]*\)\s*$", re.ASCII)
_DEFINE_RE = re.compile(r"^\s*#define\s+(\w+)", re.ASCII)

MAX_LINE_LENGTH = 80
MAX_FUNCTION_LENGTH = 25


def _is_case(s: str, letter_category: str) -> bool:
    if not s:
        return False
    for ch in s:
        category = unicodedata.category(ch)
        if category != letter_category and category != "Nd" and ch != "_":
            return False
    return not s.startswith("_") and not s.endswith("_")


def is_snake_case(s: str) -> bool:
    """True for lower-case letters, digits and inner underscores only."""
    return _is_case(s, "Ll")


def is_screaming_snake_case(s: str) -> bool:
    """True for upper-case letters, digits and inner underscores only."""
    return _is_case(s, "Lu")


def _byte_length(line: str) -> int:
    return len(line.encode("utf-8", "surrogateescape"))


class LineLengthRule(Rule):
    name = "C-L1"
    description = "Une ligne ne doit pas dépasser 80 caractères"
    level = 1

    def check(self, ctx: FileContext) -> list[Violation]:
        return [
            Violation(
                rule=self.name,
                message="Ligne trop longue",
                line=number,
                severity="major",
                description="La ligne contient plus de 80 caractères",
            )
            for number, line in enumerate(ctx.lines, start=1)
            if _byte_length(line) > MAX_LINE_LENGTH
        ]


class EmptyLinesRule(Rule):
    name = "C-L2"
    description = "Pas de lignes vides en début/fin de fichier ni consécutives"
    level = 1

    def check(self, ctx: FileContext) -> list[Violation]:
        lines = ctx.lines
        violations: list[Violation] = []
        if not lines:
            return violations

        if not lines[0].strip():
            violations.append(Violation(
                rule=self.name,
                message="Ligne vide en début de fichier",
                line=1,
                severity="major",
            ))
        if not lines[-1].strip():
            violations.append(Violation(
                rule=self.name,
                message="Ligne vide en fin de fichier",
                line=len(lines),
                severity="major",
            ))
        for number, (current, following) in enumerate(zip(lines, lines[1:]), start=2):
            if not current.strip() and not following.strip():
                violations.append(Violation(
                    rule=self.name,
                    message="Lignes vides consécutives",
                    line=number,
                    severity="major",
                ))
        return violations


class IndentationRule(Rule):
    name = "C-L3"
    description = "Indentation en TAB uniquement"
    level = 1

    def check(self, ctx: FileContext) -> list[Violation]:
        return [
            Violation(
                rule=self.name,
                message="Utilisation d'espaces au lieu de tabulations",
                line=number,
                severity="minor",
            )
            for number, line in enumerate(ctx.lines, start=1)
            if "    " in line
        ]


class VariableDeclarationRule(Rule):
    name = "C-L4"
    description = "Une seule déclaration de variable par ligne"
    level = 1

    def check(self, ctx: FileContext) -> list[Violation]:
        return [
            Violation(
                rule=self.name,
                message="Plusieurs variables déclarées sur une ligne",
                line=number,
                severity="major",
            )
            for number, line in enumerate(ctx.lines, start=1)
            if _MULTI_DECL_RE.search(line)
        ]


class FilenameRule(Rule):
    name = "C-O1"
    description = "Nom de fichier en snake_case"
    level = 1

    def check(self, ctx: FileContext) -> list[Violation]:
        base = os.path.basename(ctx.filename)
        dot = base.rfind(".")
        stem = base[:dot] if dot >= 0 else base
        if is_snake_case(stem):
            return []
        return [Violation(
            rule=self.name,
            message="Nom de fichier non conforme au snake_case",
            line=1,
            severity="major",
            description="Le nom de fichier doit être en snake_case (ex: mon_fichier.c)",
        )]


class FunctionNamingRule(Rule):
    name = "C-F1"
    description = "Nom de fonction en snake_case"
    level = 1

    def check(self, ctx: FileContext) -> list[Violation]:
        violations: list[Violation] = []
        for number, line in enumerate(ctx.lines, start=1):
            match = _FUNC_NAME_RE.search(line)
            if not match:
                continue
            func_name = match.group(1)
            if func_name != "main" and not is_snake_case(func_name):
                violations.append(Violation(
                    rule=self.name,
                    message="Nom de fonction non conforme au snake_case",
                    line=number,
                    severity="major",
                    description=f"Le nom de fonction '{func_name}' doit être en snake_case",
                ))
        return violations


class MacroNamingRule(Rule):
    name = "C-F2"
    description = "Nom de macro en SCREAMING_SNAKE_CASE"
    level = 1

    def check(self, ctx: FileContext) -> list[Violation]:
        violations: list[Violation] = []
        for number, line in enumerate(ctx.lines, start=1):
            match = _DEFINE_RE.search(line)
            if not match:
                continue
            macro_name = match.group(1)
            if not is_screaming_snake_case(macro_name):
                violations.append(Violation(
                    rule=self.name,
                    message="Nom de macro non conforme au SCREAMING_SNAKE_CASE",
                    line=number,
                    severity="major",
                    description=(
                        f"Le nom de macro '{macro_name}' doit être en SCREAMING_SNAKE_CASE"
                    ),
                ))
        return violations


class FunctionLengthRule(Rule):
    name = "C-F3"
    description = "Fonction de maximum 25 lignes"
    level = 1

    def check(self, ctx: FileContext) -> list[Violation]:
        violations: list[Violation] = []
        in_function = False
        func_start = 0
        func_name = ""
        brace_count = 0

        for number, line in enumerate(ctx.lines, start=1):
            match = _FUNC_DEF_RE.search(line)
            if match:
                func_name = match.group(1)
                func_start = number
                in_function = True
                brace_count = 0

            if not in_function:
                continue
            brace_count += line.count("{") - line.count("}")
            if brace_count == 0 and "}" in line:
                length = number - func_start + 1
                if length > MAX_FUNCTION_LENGTH:
                    violations.append(Violation(
                        rule=self.name,
                        message="Fonction trop longue",
                        line=func_start,
                        severity="major",
                        description=(
                            f"La fonction '{func_name}' fait {length} lignes (max: 25)"
                        ),
                    ))
                in_function = False
        return violations