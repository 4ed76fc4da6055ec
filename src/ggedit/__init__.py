# src/ggedit/__init__.py
"""ggedit: a small modal text editor for the terminal."""

__version__ = "0.1.0"
