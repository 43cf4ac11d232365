"""screenref — declarative screen-region matching."""

__version__ = "0.1.0"
