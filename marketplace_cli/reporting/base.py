"""
Abstract base classes for output rendering.
"""

from abc import ABC, abstractmethod
from typing import List, TextIO

from ..models import ChartVersion, Product


class Renderer(ABC):
    """
    Abstract base class for renderers.

    Renderers only read the entities they are given; they never modify them.
    """

    @abstractmethod
    def get_format_name(self) -> str:
        """
        Get the name of the output format.

        Returns:
            String identifier for the format (e.g., "table", "json")
        """
        pass

    @abstractmethod
    def render_product_list(self, products: List[Product], output: TextIO) -> None:
        pass

    @abstractmethod
    def render_product(self, product: Product, output: TextIO) -> None:
        pass

    @abstractmethod
    def render_versions(self, product: Product, output: TextIO) -> None:
        pass

    @abstractmethod
    def render_charts(self, product: Product, version: str, output: TextIO) -> None:
        """Render the charts of one product version."""
        pass

    @abstractmethod
    def render_chart(self, chart: ChartVersion, output: TextIO) -> None:
        pass

    @abstractmethod
    def render_ovas(self, product: Product, version: str, output: TextIO) -> None:
        """Render the OVAs of one product version."""
        pass

    @abstractmethod
    def render_container_images(self, product: Product, version: str, output: TextIO) -> None:
        """Render the container images of one product version."""
        pass
