"""
Command line interface for the Marketplace CLI (``mkpcli``).
"""

import argparse
import sys
from typing import Callable, List, Optional, TextIO

from .commands import CommandContext, charts, container_images, ovas, products, versions
from .config import OUTPUT_FORMATS, get_default_config_path, load_config, validate_config
from .exceptions import MarketplaceError
from .logging_config import get_logger, setup_logging
from .marketplace import Marketplace
from .models import Product
from .reporting import get_renderer
from .transport import RequestsTransport, Transport
from .upload import S3Uploader
from .version import get_full_name_with_version

logger = get_logger('cli')


def _product_list(ctx, args):
    products.list_products(ctx, all_orgs=args.all_orgs, search_term=args.search_text)


def _product_get(ctx, args):
    products.get_product(ctx, args.product)


def _version_list(ctx, args):
    versions.list_versions(ctx, args.product)


def _chart_list(ctx, args):
    charts.list_charts(ctx, args.product, args.product_version)


def _chart_get(ctx, args):
    charts.get_chart(ctx, args.product, args.chart_id, args.product_version)


def _chart_create(ctx, args):
    charts.create_chart(
        ctx,
        slug=args.product,
        version=args.product_version,
        chart_url=args.chart_url,
        chart_version=args.chart_version,
        chart_name=args.chart_name,
        repository_name=args.repository_name,
        repository_url=args.repository_url,
    )


def _ova_list(ctx, args):
    ovas.list_ovas(ctx, args.product, args.product_version)


def _ova_create(ctx, args):
    ovas.create_ova(ctx, args.product, args.product_version, args.ova_file)


def _container_image_list(ctx, args):
    container_images.list_container_images(ctx, args.product, args.product_version)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command group per resource."""
    parser = argparse.ArgumentParser(
        prog='mkpcli',
        description='Command line client for the VMware Marketplace',
    )
    parser.add_argument('--version', action='version', version=get_full_name_with_version())
    parser.add_argument('--config', help='Path to a YAML configuration file')
    parser.add_argument('--host', help='Marketplace API host')
    parser.add_argument('--csp-api-token', help='CSP API token (defaults to $CSP_API_TOKEN)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Console log level')
    parser.add_argument('--log-file', help='Write a debug log to this file')
    parser.add_argument('--debug', '--verbose', dest='verbose', action='store_true',
                        help='Enable verbose logging')

    output_options = argparse.ArgumentParser(add_help=False)
    output_options.add_argument('-f', '--output-format', choices=OUTPUT_FORMATS,
                                help='Output format (default: table)')

    product_options = argparse.ArgumentParser(add_help=False)
    product_options.add_argument('-p', '--product', required=True, help='Product slug')

    version_options = argparse.ArgumentParser(add_help=False)
    version_options.add_argument('-v', '--product-version', default='',
                                 help='Product version (default: latest)')

    required_version_options = argparse.ArgumentParser(add_help=False)
    required_version_options.add_argument('-v', '--product-version', required=True,
                                          help='Product version')

    resources = parser.add_subparsers(dest='resource', metavar='<resource>')
    resources.required = True

    # product
    product_parser = resources.add_parser('product', aliases=['products'], help='List and get products')
    product_actions = product_parser.add_subparsers(dest='action', metavar='<action>')
    product_actions.required = True

    product_list = product_actions.add_parser('list', parents=[output_options], help='List products')
    product_list.add_argument('--all-orgs', action='store_true',
                              help='Include products from other organizations')
    product_list.add_argument('--search-text', default='', help='Filter by search text')
    product_list.set_defaults(handler=_product_list)

    product_get = product_actions.add_parser('get', parents=[output_options, product_options],
                                             help='Get details for a product')
    product_get.set_defaults(handler=_product_get)

    # product-version
    version_parser = resources.add_parser('product-version', aliases=['product-versions'],
                                          help='List product versions')
    version_actions = version_parser.add_subparsers(dest='action', metavar='<action>')
    version_actions.required = True

    version_list = version_actions.add_parser('list', parents=[output_options, product_options],
                                              help='List the versions of a product')
    version_list.set_defaults(handler=_version_list)

    # chart
    chart_parser = resources.add_parser('chart', aliases=['charts'], help='List, get and create charts')
    chart_actions = chart_parser.add_subparsers(dest='action', metavar='<action>')
    chart_actions.required = True

    chart_list = chart_actions.add_parser('list', parents=[output_options, product_options, version_options],
                                          help='List the charts of a product version')
    chart_list.set_defaults(handler=_chart_list)

    chart_get = chart_actions.add_parser('get', parents=[output_options, product_options, version_options],
                                         help='Get a chart')
    chart_get.add_argument('--chart-id', required=True, help='Chart id')
    chart_get.set_defaults(handler=_chart_get)

    chart_create = chart_actions.add_parser(
        'create', parents=[output_options, product_options, required_version_options],
        help='Add a chart to a product version')
    chart_create.add_argument('--chart-url', required=True, help='URL of the chart tarball')
    chart_create.add_argument('--chart-version', required=True, help='Chart version')
    chart_create.add_argument('--chart-name', required=True, help='Chart name')
    chart_create.add_argument('--repository-name', required=True, help='Chart repository name')
    chart_create.add_argument('--repository-url', required=True, help='Chart repository URL')
    chart_create.set_defaults(handler=_chart_create)

    # ova
    ova_parser = resources.add_parser('ova', aliases=['ovas'], help='List and create OVAs')
    ova_actions = ova_parser.add_subparsers(dest='action', metavar='<action>')
    ova_actions.required = True

    ova_list = ova_actions.add_parser('list', parents=[output_options, product_options, version_options],
                                      help='List the OVAs of a product version')
    ova_list.set_defaults(handler=_ova_list)

    ova_create = ova_actions.add_parser(
        'create', parents=[output_options, product_options, required_version_options],
        help='Upload an OVA and add it to a product version')
    ova_create.add_argument('--ova-file', required=True, help='OVA file to upload')
    ova_create.set_defaults(handler=_ova_create)

    # container-image
    image_parser = resources.add_parser('container-image', aliases=['container-images'],
                                        help='List container images')
    image_actions = image_parser.add_subparsers(dest='action', metavar='<action>')
    image_actions.required = True

    image_list = image_actions.add_parser('list', parents=[output_options, product_options, version_options],
                                          help='List the container images of a product version')
    image_list.set_defaults(handler=_container_image_list)

    return parser


def main(argv: Optional[List[str]] = None, transport: Optional[Transport] = None,
         uploader_factory: Optional[Callable[[Product], object]] = None,
         stdout: Optional[TextIO] = None) -> int:
    """
    Run one command.

    Args:
        argv: Arguments without the program name; defaults to sys.argv[1:]
        transport: HTTP transport override
        uploader_factory: Uploader override for OVA uploads
        stdout: Stream for rendered output; defaults to sys.stdout

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    owned_transport = None

    try:
        config = load_config(args.config or get_default_config_path())

        if args.host:
            config.marketplace.host = args.host
        if args.csp_api_token:
            config.marketplace.api_token = args.csp_api_token
        if args.log_level:
            config.logging.level = args.log_level
        if args.log_file:
            config.logging.log_file = args.log_file
        if args.verbose:
            config.logging.verbose = True
        if args.output_format:
            config.output.default_format = args.output_format
        validate_config(config)

        setup_logging(config.logging.level, config.logging.log_file, config.logging.verbose)
        logger.debug(f"Command line arguments: {args}")

        renderer = get_renderer(config.output.default_format, pretty_json=config.output.pretty_json)
        if transport is None:
            transport = owned_transport = RequestsTransport(timeout=config.marketplace.timeout)
        marketplace = Marketplace(config.marketplace, transport=transport, storage=config.storage)

        if uploader_factory is None:
            def uploader_factory(product):
                return S3Uploader.from_config(config.storage, org_id=product.org_id)

        ctx = CommandContext(
            marketplace=marketplace,
            renderer=renderer,
            output=stdout or sys.stdout,
            uploader_factory=uploader_factory,
        )
        args.handler(ctx, args)

    except MarketplaceError as error:
        logger.debug(f"{args.resource} {args.action} failed", exc_info=True)
        print(f"Error: {error}", file=sys.stderr)
        return 1

    finally:
        if owned_transport is not None:
            owned_transport.close()

    return 0


if __name__ == '__main__':
    sys.exit(main())
