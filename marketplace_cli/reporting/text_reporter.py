"""
Human-readable table renderer for console output.
"""

import os
from typing import List, Optional, Sequence, TextIO

from .base import Renderer
from ..exceptions import RenderError
from ..models import ChartVersion, Product

COLUMN_SEPARATOR = "  "


class TableRenderer(Renderer):
    """
    Borderless, left aligned tables with upper-case headers.
    Headers are printed in bold when the output is a terminal.
    """

    BOLD = '\033[1m'
    RESET = '\033[0m'

    def __init__(self, use_colors: Optional[bool] = None):
        """
        Args:
            use_colors: Whether to use ANSI codes. Auto-detects per output stream if None.
        """
        self.use_colors = use_colors

    def get_format_name(self) -> str:
        return "table"

    def render_product_list(self, products: List[Product], output: TextIO) -> None:
        rows = []
        for product in products:
            latest = product.get_version("")
            rows.append([
                product.slug,
                product.display_name,
                product.solution_type,
                latest.number if latest else "N/A",
            ])
        self._write_table(output, ["Slug", "Name", "Type", "Latest Version"], rows)
        output.write(f"Total count: {len(products)}\n")

    def render_product(self, product: Product, output: TextIO) -> None:
        output.write("Product Details:\n")
        self._write_table(output, ["Slug", "Name", "Type"],
                          [[product.slug, product.display_name, product.solution_type]])
        output.write("\nVersions:\n")
        self.render_versions(product, output)

    def render_versions(self, product: Product, output: TextIO) -> None:
        rows = [[version.number, version.status] for version in product.all_versions]
        self._write_table(output, ["Number", "Status"], rows)

    def render_charts(self, product: Product, version: str, output: TextIO) -> None:
        charts = product.get_charts_for_version(version)
        if not charts:
            output.write(f'product "{product.slug}" {version} does not have any charts\n')
            return
        self._write_table(output, ["Id", "Version", "URL", "Repository"],
                          [self._chart_row(chart) for chart in charts])

    def render_chart(self, chart: ChartVersion, output: TextIO) -> None:
        self._write_table(output, ["Id", "Version", "URL", "Repository"], [self._chart_row(chart)])

    def render_ovas(self, product: Product, version: str, output: TextIO) -> None:
        ovas = product.get_ovas_for_version(version)
        if not ovas:
            output.write(f'product "{product.slug}" {version} does not have any OVAs\n')
            return

        rows = []
        for ova in ovas:
            try:
                details = ova.item_details()
                files = details.get('files') or []
                size = sum(int(item.get('size') or 0) for item in files)
            except (AttributeError, TypeError, ValueError) as e:
                raise RenderError(f"failed to parse the list of OVA files: {e}") from e

            name = details.get('name') or ova.name or os.path.basename(ova.url or "")
            rows.append([name, size, details.get('type'), len(files)])

        self._write_table(output, ["Name", "Size", "Type", "Files"], rows)

    def render_container_images(self, product: Product, version: str, output: TextIO) -> None:
        image_lists = product.get_container_images_for_version(version)
        if not image_lists:
            output.write(f'product "{product.slug}" {version} does not have any container images\n')
            return

        for images in image_lists:
            rows = []
            for docker_url in images.docker_urls:
                tags = ", ".join(tag.tag for tag in docker_url.image_tags if tag.tag)
                rows.append([docker_url.url, tags, docker_url.download_count or 0])
            self._write_table(output, ["Image", "Tags", "Downloads"], rows)
            output.write("Deployment instructions:\n")
            output.write(f"{images.deployment_instruction or ''}\n")

    def _chart_row(self, chart: ChartVersion) -> List:
        repository = ""
        if chart.repo is not None:
            repository = f"{chart.repo.name or ''} {chart.repo.url or ''}".strip()
        return [chart.id, chart.version, chart.tar_url, repository]

    def _supports_color(self, output: TextIO) -> bool:
        if self.use_colors is not None:
            return self.use_colors
        return hasattr(output, 'isatty') and output.isatty()

    def _write_table(self, output: TextIO, headers: Sequence[str], rows: Sequence[Sequence]) -> None:
        """
        Write one table.

        Args:
            output: Stream to write to
            headers: Column titles, printed upper-case
            rows: Cell values; None renders as an empty cell
        """
        header_cells = [header.upper() for header in headers]
        body = [["" if cell is None else str(cell) for cell in row] for row in rows]

        widths = [len(cell) for cell in header_cells]
        for row in body:
            for index, cell in enumerate(row):
                widths[index] = max(widths[index], len(cell))

        header_line = self._format_line(header_cells, widths)
        if self._supports_color(output):
            header_line = f"{self.BOLD}{header_line}{self.RESET}"
        output.write(header_line + "\n")

        for row in body:
            output.write(self._format_line(row, widths) + "\n")

    @staticmethod
    def _format_line(cells: Sequence[str], widths: Sequence[int]) -> str:
        return COLUMN_SEPARATOR.join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()
