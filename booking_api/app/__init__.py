"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, errors, database and
security), ``services`` (logic per collection), ``schemas`` and
``api`` (routers).
"""

from .main import app  # noqa: F401
