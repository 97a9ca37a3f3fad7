"""
Command layer.

Each command fetches what it needs through the Marketplace repository,
validates preconditions, applies its change to the product in memory,
submits it when it changes anything, and renders the result.
"""

from dataclasses import dataclass
from typing import Callable, Optional, TextIO

from ..marketplace import Marketplace
from ..models import Product
from ..reporting import Renderer


@dataclass
class CommandContext:
    """Collaborators shared by every command of one invocation."""
    marketplace: Marketplace
    renderer: Renderer
    output: TextIO
    # builds an uploader for the product's publisher organization
    uploader_factory: Optional[Callable[[Product], object]] = None


__all__ = ['CommandContext']
