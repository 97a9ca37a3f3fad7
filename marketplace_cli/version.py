"""
Version information for the Marketplace CLI.

The version string lives in ``marketplace_cli/__init__.py``; this module
derives the strings printed by ``--version`` and sent as ``User-Agent``.
"""

from . import __version__

PROGRAM_NAME = "mkpcli"
DISPLAY_NAME = "Marketplace CLI"


def get_version() -> str:
    return __version__


def get_user_agent() -> str:
    """User-Agent header value for API requests, e.g. ``mkpcli/0.3.0``."""
    return f"{PROGRAM_NAME}/{__version__}"


def get_full_name_with_version() -> str:
    """Name printed by ``--version``, e.g. ``Marketplace CLI v0.3.0``."""
    return f"{DISPLAY_NAME} v{__version__}"
