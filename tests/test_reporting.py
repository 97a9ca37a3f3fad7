import io
import json

import pytest

from marketplace_cli.exceptions import RenderError
from marketplace_cli.models import ChartVersion
from marketplace_cli.reporting import JSONRenderer, TableRenderer, get_renderer

from fakes import add_versions, create_fake_ova, create_fake_product


class TestGetRenderer:

    def test_table(self):
        renderer = get_renderer("table")

        assert isinstance(renderer, TableRenderer)
        assert renderer.get_format_name() == "table"

    def test_json(self):
        renderer = get_renderer("json", pretty_json=True)

        assert isinstance(renderer, JSONRenderer)
        assert renderer.pretty_print

    def test_unknown_format(self):
        with pytest.raises(RenderError) as exc_info:
            get_renderer("yaml")

        assert exc_info.value.format_name == "yaml"
        assert str(exc_info.value).startswith("Rendering error for format 'yaml': ")


class TestJSONRenderer:

    def test_product_is_api_json(self):
        product = create_fake_product(product_id="1234")
        add_versions(product, "1.2.3")
        product.extra["logo"] = "logo.png"
        output = io.StringIO()

        JSONRenderer().render_product(product, output)

        assert output.getvalue().endswith("\n")
        assert json.loads(output.getvalue()) == product.to_dict()
        assert json.loads(output.getvalue())["logo"] == "logo.png"

    def test_ovas_are_filtered_by_version(self):
        product = create_fake_product()
        add_versions(product, "1.2.3", "2.3.4")
        product.product_deployment_files = [create_fake_ova("a", "1.2.3"), create_fake_ova("b", "2.3.4")]
        output = io.StringIO()

        JSONRenderer().render_ovas(product, "2.3.4", output)

        assert [ova["name"] for ova in json.loads(output.getvalue())] == ["b"]

    def test_empty_collections_render_as_empty_lists(self):
        product = create_fake_product()
        add_versions(product, "1.2.3")
        output = io.StringIO()

        JSONRenderer().render_charts(product, "1.2.3", output)

        assert json.loads(output.getvalue()) == []

    def test_pretty_print(self):
        product = create_fake_product()
        add_versions(product, "1.2.3")
        output = io.StringIO()

        JSONRenderer(pretty_print=True).render_versions(product, output)

        assert output.getvalue().startswith("[\n  {")
        assert json.loads(output.getvalue())[0]["versionnumber"] == "1.2.3"


class TestTableRenderer:

    def test_bold_headers_when_colors_enabled(self):
        product = create_fake_product()
        add_versions(product, "1.2.3")
        output = io.StringIO()

        TableRenderer(use_colors=True).render_versions(product, output)

        assert output.getvalue().startswith("\033[1mNUMBER  STATUS\033[0m\n")

    def test_no_colors_for_non_terminal_output(self):
        product = create_fake_product()
        add_versions(product, "1.2.3")
        output = io.StringIO()

        TableRenderer().render_versions(product, output)

        assert "\033[" not in output.getvalue()

    def test_missing_values_render_as_empty_cells(self):
        output = io.StringIO()

        TableRenderer(use_colors=False).render_chart(ChartVersion(id="chart-1"), output)

        assert output.getvalue().splitlines() == ["ID       VERSION  URL  REPOSITORY", "chart-1"]
