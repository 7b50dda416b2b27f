"""
Core modules (pool parser, card layout engine, PDF surface, output files).

Avoid importing heavy dependencies at package import time; import submodules directly:
- `math_bingo.core.parser`
- `math_bingo.core.layout`
- `math_bingo.core.generator`
- `math_bingo.core.pdf`
- `math_bingo.core.output`
"""

__all__ = []
