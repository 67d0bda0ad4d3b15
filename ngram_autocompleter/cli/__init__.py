# ngram_autocompleter/cli/__init__.py
# expose CLI entrypoint

from .cli import CLI, main

__all__ = ["CLI", "main"]
