"""
Container image commands.
"""

from . import CommandContext


def list_container_images(ctx: CommandContext, slug: str, version: str = "") -> None:
    """List the container images of a product version; no version means the latest."""
    product, found = ctx.marketplace.get_product_with_version(slug, version)
    ctx.renderer.render_container_images(product, found.number, ctx.output)
