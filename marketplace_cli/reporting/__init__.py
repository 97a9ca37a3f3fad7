"""
Reporting Module

Renders products and their artifacts as tables or JSON.
"""

from .base import Renderer
from .json_reporter import JSONRenderer
from .text_reporter import TableRenderer
from ..exceptions import RenderError


def get_renderer(format_name: str, pretty_json: bool = False) -> Renderer:
    """
    Get the renderer for an output format.

    Args:
        format_name: "table" or "json"
        pretty_json: Indent JSON output

    Raises:
        RenderError: If the format is not supported
    """
    if format_name == "table":
        return TableRenderer()
    if format_name == "json":
        return JSONRenderer(pretty_print=pretty_json)
    raise RenderError("unsupported output format, expected table or json", format_name=format_name)


__all__ = ['Renderer', 'JSONRenderer', 'TableRenderer', 'get_renderer']
