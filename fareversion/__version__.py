"""
fareversion version information.

Single source of the package version, read by ``pyproject.toml`` and shown
by ``fareversion --version``.
"""

__version__ = "0.3.0"
