"""
Evento - template composition and rendering engine.

Templates are arenas of component nodes whose properties may bind to a
data payload. Rendering resolves the bindings and produces a
deterministic visual tree.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
