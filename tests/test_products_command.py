import pytest

from marketplace_cli.commands import products, versions
from marketplace_cli.exceptions import ProductNotFoundError
from marketplace_cli.transport import HTTPResponse

from fakes import add_versions, create_fake_product, product_list_response, product_response


class TestListProducts:

    def test_renders_every_page(self, ctx, transport, output):
        first = create_fake_product(product_id="1", slug="first-product", display_name="First")
        add_versions(first, "1.0.0", "1.1.0")
        second = create_fake_product(product_id="2", slug="second-product", display_name="Second")
        third = create_fake_product(product_id="3", slug="third-product", display_name="Third")
        add_versions(third, "0.1.0")
        transport.returns_on_call(0, product_list_response([first, second], total=3))
        transport.returns_on_call(1, product_list_response([third], total=3))

        products.list_products(ctx)

        lines = output.getvalue().splitlines()
        assert lines[0].split() == ["SLUG", "NAME", "TYPE", "LATEST", "VERSION"]
        assert lines[1].split() == ["first-product", "First", "HELMCHARTS", "1.1.0"]
        assert lines[2].split() == ["second-product", "Second", "HELMCHARTS", "N/A"]
        assert lines[3].split() == ["third-product", "Third", "HELMCHARTS", "0.1.0"]
        assert lines[4] == "Total count: 3"

    def test_passes_filters(self, ctx, transport, output):
        transport.returns(product_list_response([], total=0))

        products.list_products(ctx, all_orgs=True, search_term="tanzu")

        assert transport.requests[0].query["managed"] == "false"
        assert transport.requests[0].query["search"] == "tanzu"
        assert output.getvalue().splitlines()[-1] == "Total count: 0"


class TestGetProduct:

    def test_renders_details_and_versions(self, ctx, transport, output):
        product = create_fake_product()
        add_versions(product, "1.2.3", "2.3.4")
        transport.returns(product_response(product))

        products.get_product(ctx, "my-super-product")

        text = output.getvalue()
        assert text.startswith("Product Details:\n")
        assert "my-super-product  My Super Product  HELMCHARTS" in text
        assert "\nVersions:\n" in text
        assert "1.2.3   PENDING" in text
        assert "2.3.4   PENDING" in text

    def test_not_found(self, ctx, transport, output):
        transport.returns(HTTPResponse(status_code=404))

        with pytest.raises(ProductNotFoundError, match='product "nope" not found'):
            products.get_product(ctx, "nope")

        assert output.getvalue() == ""


def test_list_versions(ctx, transport, output):
    product = create_fake_product()
    add_versions(product, "1.2.3", "2.3.4")
    transport.returns(product_response(product))

    versions.list_versions(ctx, "my-super-product")

    assert output.getvalue() == (
        "NUMBER  STATUS\n"
        "1.2.3   PENDING\n"
        "2.3.4   PENDING\n"
    )
