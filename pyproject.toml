[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tealang"
version = "0.1.0"
description = "Lexer, syntax tree and tree-walking interpreter for the Tea scripting language"
requires-python = ">=3.10"
dependencies = []
keywords = ["interpreter", "lexer", "ast", "scripting", "language"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tealang"]

[tool.pytest.ini_options]
addopts = "-ra"
