"""
Product repository for the marketplace API.

Fetches, lists and replaces product documents. Updates are read-modify-write:
the caller fetches a product, changes it in memory and submits the whole
document with ``put_product``. The server applies no merge and no version
check, so a concurrent edit made elsewhere between the GET and the PUT is
overwritten.
"""

import json
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote, urlencode, urlunsplit

from .config import MarketplaceConfig, StorageConfig
from .exceptions import (
    ConfigurationError,
    ProductNotFoundError,
    RequestFailedError,
    ResponseParseError,
    TransportError,
    VersionNotFoundError,
)
from .logging_config import get_logger
from .models import Product, Version
from .pagination import Pagination
from .responses import GetProductResponse, ListProductResponse
from .transport import HTTPRequest, HTTPResponse, RequestsTransport, Transport

logger = get_logger('marketplace')

PRODUCTS_PATH = "/api/v1/products"

# parse failures surfaced as ResponseParseError
PARSE_ERRORS = (ValueError, TypeError, KeyError)


class Marketplace:
    """Client for the products endpoints of the marketplace API."""

    def __init__(self, config: MarketplaceConfig, transport: Optional[Transport] = None,
                 storage: Optional[StorageConfig] = None):
        """
        Args:
            config: Host, token and paging settings
            transport: HTTP transport; a requests based one is created if omitted
            storage: Object storage settings used by upload commands
        """
        if not config.api_token:
            raise ConfigurationError(
                "a CSP API token is required: set CSP_API_TOKEN, pass --csp-api-token "
                "or add marketplace.api_token to the configuration file"
            )
        self.config = config
        self.storage = storage or StorageConfig()
        self.transport = transport or RequestsTransport(timeout=config.timeout)

    @property
    def storage_bucket(self) -> str:
        return self.storage.bucket

    @property
    def storage_region(self) -> str:
        return self.storage.region

    def make_url(self, path: str, params: Optional[Dict[str, str]] = None) -> str:
        query = urlencode(params or {})
        return urlunsplit(("https", self.config.host, path, query, ""))

    def _send(self, method: str, url: str, body: bytes = None, content_type: str = None) -> HTTPResponse:
        headers = {
            'Accept': 'application/json',
            'csp-auth-token': self.config.api_token,
        }
        if content_type:
            headers['Content-Type'] = content_type
        return self.transport.send(HTTPRequest(method=method, url=url, headers=headers, body=body))

    def get_product(self, slug: str) -> Product:
        """
        Fetch a product by slug.

        Raises:
            ProductNotFoundError: If the API answers 404
            RequestFailedError: If the request fails or the status is not 200
            ResponseParseError: If the body is not a product envelope
        """
        url = self.make_url(f"{PRODUCTS_PATH}/{quote(slug, safe='')}", {
            'increaseViewCount': 'false',
            'isSlug': 'true',
        })

        try:
            response = self._send('GET', url)
        except TransportError as e:
            raise RequestFailedError(f'sending the request for product "{slug}" failed: {e}') from e

        if response.status_code == 404:
            raise ProductNotFoundError(slug)

        if response.status_code != 200:
            raise RequestFailedError(
                f'getting product "{slug}" failed: ({response.status_code})',
                status_code=response.status_code,
                body=response.text,
            )

        try:
            product = GetProductResponse.from_json(response.body).data
        except PARSE_ERRORS as e:
            raise ResponseParseError(f'failed to parse the response for product "{slug}": {e}') from e

        logger.debug(f"Fetched product {slug} with {len(product.all_versions)} versions")
        return product

    def get_product_with_version(self, slug: str, version: str = "") -> Tuple[Product, Version]:
        """
        Fetch a product and resolve one of its versions.

        Args:
            slug: Product slug
            version: Version number; empty or "latest" selects the latest version

        Raises:
            VersionNotFoundError: If the product has no such version
        """
        product = self.get_product(slug)

        number = "" if version in ("", "latest") else version
        found = product.get_version(number)
        if found is None:
            raise VersionNotFoundError(slug, version or "latest")

        return product, found

    def list_products(self, all_orgs: bool = False, search_term: str = "") -> List[Product]:
        """
        Fetch every product visible to the caller, page by page.

        Args:
            all_orgs: Include products of other organizations
            search_term: Optional free-text filter

        Raises:
            RequestFailedError: If a page request fails or the status is not 200
            ResponseParseError: If a page body is not a product list envelope
        """
        values = {'managed': str(not all_orgs).lower()}
        if search_term:
            values['search'] = search_term

        pagination = Pagination(page=1, page_size=self.config.page_size, max_pages=self.config.max_pages)
        products: List[Product] = []

        while True:
            url = self.make_url(PRODUCTS_PATH, pagination.apply(values))
            try:
                response = self._send('GET', url)
            except TransportError as e:
                raise RequestFailedError(f"sending the request for the list of products failed: {e}") from e

            if response.status_code != 200:
                raise RequestFailedError(
                    f"getting the list of products failed: ({response.status_code}) {response.reason}".rstrip(),
                    status_code=response.status_code,
                    body=response.text,
                )

            try:
                page = ListProductResponse.from_json(response.body)
            except PARSE_ERRORS as e:
                raise ResponseParseError(f"failed to parse the list of products: {e}") from e

            products.extend(page.products)
            logger.debug(f"Page {pagination.page}: {len(page.products)} products, "
                         f"{len(products)} of {page.total_count}")

            if pagination.is_complete(len(products), page.total_count, len(page.products)):
                break
            pagination.next_page()

        return products

    def put_product(self, product: Product, is_version_update: bool = False) -> Product:
        """
        Replace the product document on the server.

        Args:
            product: Complete product, freshly fetched and modified in place
            is_version_update: Whether the update adds a version

        Returns:
            The server's copy of the product after the update

        Raises:
            RequestFailedError: If the request fails or the status is not 200;
                carries the response body the API sent as the explanation
            ResponseParseError: If the body is not a product envelope
        """
        encoded = json.dumps(product.to_dict()).encode('utf-8')

        url = self.make_url(f"{PRODUCTS_PATH}/{quote(product.product_id or '', safe='')}", {
            'archivepreviousversion': 'false',
            'isversionupdate': str(is_version_update).lower(),
        })

        logger.info(f"Updating product {product.slug}")
        try:
            response = self._send('PUT', url, body=encoded, content_type='application/json')
        except TransportError as e:
            raise RequestFailedError(f'sending the update for product "{product.slug}" failed: {e}') from e

        if response.status_code != 200:
            raise RequestFailedError(
                f'updating product "{product.slug}" failed: ({response.status_code})\n{response.text}',
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return GetProductResponse.from_json(response.body).data
        except PARSE_ERRORS as e:
            raise ResponseParseError(f'failed to parse the response for product "{product.slug}": {e}') from e
