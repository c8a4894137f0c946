[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "epicstyle"
version = "0.1.0"
description = "Coding-style checker for C source and header files"
requires-python = ">=3.10"
dependencies = []
keywords = ["c", "coding-style", "linter", "style-checker", "static-analysis"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Natural Language :: French",
    "Operating System :: OS Independent",
    "Programming Language :: C",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
epicstyle = "epicstyle.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["epicstyle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
