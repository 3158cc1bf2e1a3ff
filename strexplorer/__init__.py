"""Public package surface for strexplorer.

Exports ``decompose`` and the cell types for programmatic use, and ``main``
for CLI invocation. The terminal UI lives in submodules.
"""

from __future__ import annotations

from .cells import Cell, IndexedValue, decompose


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["Cell", "IndexedValue", "decompose", "main"]
