"""
Product version commands.
"""

from . import CommandContext


def list_versions(ctx: CommandContext, slug: str) -> None:
    product = ctx.marketplace.get_product(slug)
    ctx.renderer.render_versions(product, ctx.output)
