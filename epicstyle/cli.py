"""Command-line entry point: analyse a file or a directory tree."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Iterator, Sequence

from .analyzer import Analyzer, FileResult
from .reporter import Reporter

_SOURCE_EXTENSIONS = (".c", ".h")
_USAGE = "Usage: epicstyle [options] <file_or_directory>"


def _extension(path: str) -> str:
    base = os.path.basename(path)
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def _is_source(path: str) -> bool:
    return _extension(path) in _SOURCE_EXTENSIONS


def _walk(path: str) -> Iterator[str]:
    """Yield ``path`` and everything below it, depth first, in lexical order."""
    yield path
    if os.path.isdir(path) and not os.path.islink(path):
        for name in sorted(os.listdir(path)):
            yield from _walk(os.path.join(path, name))


def collect_files(path: str) -> list[str]:
    """Return the .c and .h files to analyse under ``path``.

    A directory is walked recursively; a single file must itself have a
    .c or .h extension, otherwise ValueError is raised. A missing path
    raises the usual OSError.
    """
    if os.path.isdir(path):
        return [entry for entry in _walk(path) if _is_source(entry)]
    os.stat(path)
    if not _is_source(path):
        raise ValueError("le fichier doit avoir une extension .c ou .h")
    return [path]


def analyze_target(analyzer: Analyzer, path: str, level: int) -> list[FileResult]:
    """Analyse every source file found at ``path`` with rules up to ``level``."""
    return [analyzer.analyze_file(file, level) for file in collect_files(path)]


def has_violations(results: Sequence[FileResult]) -> bool:
    """True if any file has at least one violation."""
    return any(result.violations for result in results)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="epicstyle", allow_abbrev=False)
    parser.add_argument(
        "-path", "--path", default="",
        help="Chemin du fichier ou dossier à analyser",
    )
    parser.add_argument(
        "-verbose", "--verbose", action="store_true", help="Sortie détaillée",
    )
    parser.add_argument(
        "-json", "--json", action="store_true", help="Sortie au format JSON",
    )
    parser.add_argument(
        "-silent", "--silent", action="store_true",
        help="Sortie silencieuse (code de retour uniquement)",
    )
    parser.add_argument(
        "-level", "--level", type=int, default=1,
        help="Niveau de vérification (1=base, 2=avancé)",
    )
    parser.add_argument("targets", nargs="*", help=argparse.SUPPRESS)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the checker; return 1 on error or when violations are found."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    path = args.targets[0] if args.targets else args.path

    if not path:
        print(_USAGE)
        parser.print_help(sys.stderr)
        return 1

    analyzer = Analyzer()
    try:
        results = analyze_target(analyzer, path, args.level)
    except (OSError, ValueError) as err:
        print(f"Erreur: {err}", file=sys.stderr)
        return 1

    Reporter(args.json, args.verbose, args.silent).generate(results)
    return 1 if has_violations(results) else 0


if __name__ == "__main__":
    sys.exit(main())