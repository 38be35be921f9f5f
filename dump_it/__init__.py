# dump_it/__init__.py
"""
DumpIt package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

from dump_it.cli import cli  # noqa: E402

__all__ = ["__version__", "cli"]
