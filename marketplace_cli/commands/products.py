"""
Product commands.
"""

from . import CommandContext
from ..logging_config import get_logger

logger = get_logger('commands.products')


def list_products(ctx: CommandContext, all_orgs: bool = False, search_term: str = "") -> None:
    products = ctx.marketplace.list_products(all_orgs=all_orgs, search_term=search_term)
    logger.info(f"Found {len(products)} products")
    ctx.renderer.render_product_list(products, ctx.output)


def get_product(ctx: CommandContext, slug: str) -> None:
    product = ctx.marketplace.get_product(slug)
    ctx.renderer.render_product(product, ctx.output)
