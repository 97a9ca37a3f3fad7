"""
Chart commands.
"""

from . import CommandContext
from ..exceptions import ChartNotFoundError, VersionNotFoundError
from ..logging_config import get_logger
from ..models import DEPLOYMENT_TYPE_HELM, ChartVersion, Repo

logger = get_logger('commands.charts')


def list_charts(ctx: CommandContext, slug: str, version: str = "") -> None:
    """List the charts of a product version; no version means the latest."""
    product, found = ctx.marketplace.get_product_with_version(slug, version)
    ctx.renderer.render_charts(product, found.number, ctx.output)


def get_chart(ctx: CommandContext, slug: str, chart_id: str, version: str = "") -> None:
    product, found = ctx.marketplace.get_product_with_version(slug, version)

    chart = product.get_chart(chart_id)
    if chart is None or chart.app_version != found.number:
        raise ChartNotFoundError(slug, found.number, chart_id)

    ctx.renderer.render_chart(chart, ctx.output)


def create_chart(ctx: CommandContext, slug: str, version: str, chart_url: str, chart_version: str,
                 chart_name: str, repository_name: str, repository_url: str) -> None:
    """
    Attach a chart to an existing product version.

    The product is fetched, the chart appended, HELM added to the deployment
    types, and the whole product submitted. Nothing is sent when the version
    does not exist.
    """
    product = ctx.marketplace.get_product(slug)

    if not product.has_version(version):
        raise VersionNotFoundError(slug, version, hint="please add it first")

    product.add_chart(ChartVersion(
        name=chart_name,
        version=chart_version,
        app_version=version,
        repo=Repo(name=repository_name, url=repository_url),
        helm_tar_url=chart_url,
        tar_url=chart_url,
    ))
    product.add_deployment_type(DEPLOYMENT_TYPE_HELM)

    logger.info(f"Adding chart {chart_name} {chart_version} to {slug} {version}")
    updated = ctx.marketplace.put_product(product, False)

    ctx.renderer.render_charts(updated, version, ctx.output)
