"""Advanced (level 2) style rules, plus the level 1 file-structure rules."""

from __future__ import annotations

import re

from .base import FileContext, Rule, Violation

_TYPES = r"(int|char|float|double|long|short|unsigned)"
_FUNC_DEF_RE = re.compile(r"^\s*\w+\s+(\w+)\s*\([^)]*\)\s*$", re.ASCII)
_FUNC_PARAMS_RE = re.compile(r"^\s*\w+\s+(\w+)\s*\(([^)]*)\)", re.ASCII)
_GLOBAL_VAR_RE = re.compile(r"^\s*" + _TYPES + r"\s+\w+\s*[=;]", re.ASCII)
_FOR_DECL_RE = re.compile(r"for\s*\(\s*" + _TYPES + r"\s+\w+", re.ASCII)
_VAR_DECL_RE = re.compile(r"^\s*" + _TYPES + r"\s+\w+", re.ASCII)

MAX_PARAMETERS = 4
MAX_FUNCTIONS_PER_FILE = 3


class CommentFormatRule(Rule):
    name = "C-C1"
    description = "Format de commentaire correct (/* */ pour blocs)"
    level = 2

    def check(self, ctx: FileContext) -> list[Violation]:
        return [
            Violation(
                rule=self.name,
                message="Utilisation de // interdit",
                line=number,
                severity="major",
                description="Utiliser /* */ pour les commentaires",
            )
            for number, line in enumerate(ctx.lines, start=1)
            if "//" in line
        ]


class FunctionCommentRule(Rule):
    name = "C-C2"
    description = "Commentaire de fonction obligatoire"
    level = 2

    def check(self, ctx: FileContext) -> list[Violation]:
        violations: list[Violation] = []
        previous: str | None = None
        for number, line in enumerate(ctx.lines, start=1):
            match = _FUNC_DEF_RE.search(line)
            if match and match.group(1) != "main":
                func_name = match.group(1)
                has_comment = previous is not None and previous.strip().startswith("/*")
                if not has_comment:
                    violations.append(Violation(
                        rule=self.name,
                        message="Commentaire de fonction manquant",
                        line=number,
                        severity="major",
                        description=f"La fonction '{func_name}' doit avoir un commentaire",
                    ))
            previous = line
        return violations


class GlobalVariableRule(Rule):
    name = "C-G1"
    description = "Pas de déclaration globale non const"
    level = 2

    def check(self, ctx: FileContext) -> list[Violation]:
        violations: list[Violation] = []
        lines = ctx.lines
        in_function = False
        brace_level = 0

        for index, line in enumerate(lines):
            brace_level += line.count("{") - line.count("}")

            next_opens = index < len(lines) - 1 and "{" in lines[index + 1]
            if "(" in line and ")" in line and ("{" in line or next_opens):
                in_function = True

            if brace_level == 0:
                in_function = False

            if (
                not in_function
                and brace_level == 0
                and _GLOBAL_VAR_RE.search(line)
                and "const" not in line
            ):
                violations.append(Violation(
                    rule=self.name,
                    message="Déclaration globale non const",
                    line=index + 1,
                    severity="major",
                    description="Les variables globales doivent être const",
                ))
        return violations


class FunctionParametersRule(Rule):
    name = "C-F4"
    description = "Maximum 4 paramètres par fonction"
    level = 2

    def check(self, ctx: FileContext) -> list[Violation]:
        violations: list[Violation] = []
        for number, line in enumerate(ctx.lines, start=1):
            match = _FUNC_PARAMS_RE.search(line)
            if not match:
                continue
            func_name = match.group(1)
            params = match.group(2).strip()
            if params in ("", "void"):
                continue
            count = params.count(",") + 1
            if count > MAX_PARAMETERS:
                violations.append(Violation(
                    rule=self.name,
                    message="Trop de paramètres",
                    line=number,
                    severity="major",
                    description=(
                        f"La fonction '{func_name}' a {count} paramètres (max: 4)"
                    ),
                ))
        return violations


class LoopDeclarationRule(Rule):
    name = "C-L5"
    description = "Pas de déclaration dans les boucles for"
    level = 2

    def check(self, ctx: FileContext) -> list[Violation]:
        return [
            Violation(
                rule=self.name,
                message="Déclaration dans une boucle for",
                line=number,
                severity="major",
                description="Les variables doivent être déclarées avant la boucle",
            )
            for number, line in enumerate(ctx.lines, start=1)
            if _FOR_DECL_RE.search(line)
        ]


class FileMaxFunctionsRule(Rule):
    name = "C-O2"
    description = "Maximum 3 fonctions par fichier (hors main)"
    level = 1

    def check(self, ctx: FileContext) -> list[Violation]:
        count = sum(
            1
            for line in ctx.lines
            if (match := _FUNC_DEF_RE.search(line)) and match.group(1) != "main"
        )
        if count <= MAX_FUNCTIONS_PER_FILE:
            return []
        return [Violation(
            rule=self.name,
            message="Trop de fonctions dans le fichier",
            line=1,
            severity="major",
            description=f"Le fichier contient {count} fonctions (max: 3, hors main)",
        )]


class VariableDeclarationLocationRule(Rule):
    name = "C-V1"
    description = "Déclarations de variables uniquement en début de fonction"
    level = 1

    def check(self, ctx: FileContext) -> list[Violation]:
        violations: list[Violation] = []
        in_function = False
        func_name = ""
        brace_count = 0
        seen_statement = False

        for number, line in enumerate(ctx.lines, start=1):
            match = _FUNC_DEF_RE.search(line)
            if match:
                func_name = match.group(1)
                in_function = True
                brace_count = 0
                seen_statement = False
                continue

            if not in_function:
                continue

            brace_count += line.count("{") - line.count("}")
            trimmed = line.strip()
            if not trimmed or trimmed.startswith("/*") or trimmed.startswith("//"):
                continue

            if _VAR_DECL_RE.search(line):
                if seen_statement:
                    violations.append(Violation(
                        rule=self.name,
                        message="Déclaration de variable après du code exécutable",
                        line=number,
                        severity="major",
                        description=(
                            f"Dans la fonction '{func_name}', "
                            "les déclarations doivent être en début"
                        ),
                    ))
            elif trimmed not in ("{", "}"):
                seen_statement = True

            if brace_count == 0 and "}" in line:
                in_function = False
        return violations