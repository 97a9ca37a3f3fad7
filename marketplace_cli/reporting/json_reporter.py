"""
JSON renderer: writes the API JSON of the requested entities.
"""

import json
from typing import Any, List, TextIO

from .base import Renderer
from ..models import ChartVersion, Product


class JSONRenderer(Renderer):
    """Machine readable output, one JSON document per command."""

    def __init__(self, pretty_print: bool = False):
        """
        Args:
            pretty_print: Whether to format JSON with indentation
        """
        self.pretty_print = pretty_print

    def get_format_name(self) -> str:
        return "json"

    def render_product_list(self, products: List[Product], output: TextIO) -> None:
        self._write(output, [product.to_dict() for product in products])

    def render_product(self, product: Product, output: TextIO) -> None:
        self._write(output, product.to_dict())

    def render_versions(self, product: Product, output: TextIO) -> None:
        self._write(output, [version.to_dict() for version in product.all_versions])

    def render_charts(self, product: Product, version: str, output: TextIO) -> None:
        self._write(output, [chart.to_dict() for chart in product.get_charts_for_version(version)])

    def render_chart(self, chart: ChartVersion, output: TextIO) -> None:
        self._write(output, chart.to_dict())

    def render_ovas(self, product: Product, version: str, output: TextIO) -> None:
        self._write(output, [ova.to_dict() for ova in product.get_ovas_for_version(version)])

    def render_container_images(self, product: Product, version: str, output: TextIO) -> None:
        self._write(output, [images.to_dict() for images in product.get_container_images_for_version(version)])

    def _write(self, output: TextIO, data: Any) -> None:
        if self.pretty_print:
            json_content = json.dumps(data, indent=2, ensure_ascii=False)
        else:
            json_content = json.dumps(data, ensure_ascii=False)
        output.write(json_content + "\n")
