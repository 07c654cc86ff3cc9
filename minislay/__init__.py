"""Building blocks of a small command shell: lexing, expansion, redirections, builtins and pipelines."""

__version__ = "0.1.0"