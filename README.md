# epicstyle

A command-line checker for C coding style. It scans `.c` and `.h` files,
reports every rule violation it finds, gives each file a quality score and
prints a summary report, either as formatted text or as JSON. Rule messages
and report text are in French.

## Installation

```
pip install .
```

The package has no runtime dependencies. Install the `test` extra to run the
test suite with pytest:

```
pip install .[test]
pytest
```

## Usage

Check a single file or a whole directory tree:

```
epicstyle src/
epicstyle -path main.c
epicstyle -level 2 -verbose src/
```

Options (each accepts one dash or two, e.g. `-json` or `--json`):

| Option      | Meaning                                                        |
|-------------|----------------------------------------------------------------|
| `-path P`   | File or directory to analyse; a positional path takes precedence |
| `-verbose`  | List every violation of each file, grouped by rule             |
| `-json`     | Print the report as JSON                                       |
| `-silent`   | Print nothing; only the exit status tells the result           |
| `-level N`  | `1` for the base rules (default), `2` adds the advanced rules  |

A directory is walked recursively in sorted order, without following
symbolic links to directories, and every file ending in `.c` or `.h` is
analysed. A single file must itself end in `.c` or `.h`.

Exit status:

- `0` when no violation was found;
- `1` when there are violations, when no path was given (a usage line and
  the option help are printed), or when the target cannot be read or has the
  wrong extension (an `Erreur: ...` line goes to standard error).

## Rules

Level 1:

- `C-L1` lines of at most 80 bytes (UTF-8)
- `C-L2` no empty line at the start or end of a file, no consecutive empty lines
- `C-L3` no run of four spaces on a line (indent with tabs)
- `C-L4` one variable declaration per line
- `C-V1` declarations only at the start of a function
- `C-O1` file names in snake_case
- `C-F1` function names in snake_case
- `C-F2` macro names in SCREAMING_SNAKE_CASE
- `C-F3` functions of at most 25 lines
- `C-O2` at most 3 functions per file, not counting `main`

Level 2:

- `C-C1` no `//` comments
- `C-C2` every function except `main` preceded by a `/*` comment line
- `C-G1` no non-const global variables of a basic type
- `C-F4` at most 4 parameters per function
- `C-L5` no declarations inside a `for` header

All violations are of severity `major`, except `C-L3`, which is `minor`.

## Score

Each file scores `100 - 100 * violations / lines`, clamped to 0–100; an empty
file scores 100. The global score is the average over all files.

In JSON output a file without violations has `"violations": null`, and the
totals are reported as `total_score`, `total_files`, `total_lines`,
`total_violations` and `clean_files`.

## Using it from Python

```python
import io

from epicstyle.analyzer import Analyzer, calculate_global_results
from epicstyle.reporter import Reporter

analyzer = Analyzer()
result = analyzer.analyze_file("my_file.c", 2)
for violation in result.violations:
    print(violation.rule, violation.line, violation.message)

buffer = io.StringIO()
Reporter(json_output=False, verbose=True, silent=False, stream=buffer).generate([result])
print(buffer.getvalue())

print(calculate_global_results([result]).to_dict())
```

Other useful pieces:

- `Analyzer.rules_for_level(level)` lists the rules applied at a level.
- `epicstyle.analyzer.read_file`, `calculate_score` and
  `calculate_global_results` are available on their own.
- `epicstyle.rules.base` holds `Violation`, `FileContext`, the abstract
  `Rule` and `RuleSet`; subclass `Rule` (set `name`, `description`, `level`
  and implement `check(ctx)`) and add it to `analyzer.rule_set` to run your
  own checks.
- `epicstyle.cli.collect_files(path)` and `analyze_target(analyzer, path, level)`
  do the file discovery and analysis behind the command.

## Limitations

The checks work line by line with regular expressions and brace counting;
the C code is not parsed or preprocessed, so unusual layouts can be missed or
misreported. The checker only reports problems: it does not reformat or fix
files, and the rules and their limits are fixed rather than configurable.