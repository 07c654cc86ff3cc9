[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "minislay"
version = "0.1.0"
description = "Building blocks of a small command shell: lexing, variable expansion, wildcards, redirections, builtins and pipelines."
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "lexer", "pipeline", "redirection", "builtins"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["minislay*"]

[tool.pytest.ini_options]
addopts = "-ra"
