[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kpl"
version = "1.0.0"
description = "Tools for the KPL teaching language: scanner, symbol table, semantic checks and a stack virtual machine"
requires-python = ">=3.10"
dependencies = []
keywords = ["kpl", "compiler", "scanner", "lexer", "symbol-table", "virtual-machine", "interpreter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
    "Topic :: Software Development :: Interpreters",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kplrun = "kpl.runner:main"
kplscan = "kpl.scan:main"

[tool.hatch.build.targets.wheel]
packages = ["kpl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
