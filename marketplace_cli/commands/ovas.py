"""
OVA commands.
"""

import os

from . import CommandContext
from ..exceptions import ConfigurationError, VersionNotFoundError
from ..logging_config import get_logger
from ..models import ProductDeploymentFile

logger = get_logger('commands.ovas')


def list_ovas(ctx: CommandContext, slug: str, version: str = "") -> None:
    """List the OVAs of a product version; no version means the latest."""
    product, found = ctx.marketplace.get_product_with_version(slug, version)
    ctx.renderer.render_ovas(product, found.number, ctx.output)


def create_ova(ctx: CommandContext, slug: str, version: str, ova_file: str) -> None:
    """
    Upload an OVA and attach it to an existing product version.

    The new deployment file is appended; OVAs already attached to this or any
    other version are kept. If the upload succeeds and the product update
    fails, the uploaded object stays in the bucket.
    """
    if ctx.uploader_factory is None:
        raise ConfigurationError("no uploader configured for OVA uploads")

    product = ctx.marketplace.get_product(slug)

    if not product.has_version(version):
        raise VersionNotFoundError(slug, version, hint="please add it first")

    uploader = ctx.uploader_factory(product)
    file_url, file_hash = uploader.upload(ctx.marketplace.storage_bucket, ova_file)

    product.add_deployment_file(ProductDeploymentFile(
        name=os.path.basename(ova_file),
        url=file_url,
        app_version=version,
        hash_digest=file_hash,
        hash_algo=uploader.hash_algo,
    ))

    logger.info(f"Adding OVA {os.path.basename(ova_file)} to {slug} {version}")
    updated = ctx.marketplace.put_product(product, False)

    ctx.renderer.render_ovas(updated, version, ctx.output)
