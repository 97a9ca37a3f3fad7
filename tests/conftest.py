"""Pytest fixtures for the marketplace CLI tests."""

import io
import logging

import pytest

from marketplace_cli.commands import CommandContext
from marketplace_cli.config import MarketplaceConfig, StorageConfig
from marketplace_cli.logging_config import LOGGER_NAME
from marketplace_cli.marketplace import Marketplace
from marketplace_cli.reporting import TableRenderer

from fakes import FakeTransport


@pytest.fixture
def transport():
    """In-memory transport with no canned responses."""
    return FakeTransport()


@pytest.fixture
def marketplace(transport):
    config = MarketplaceConfig(host="marketplace.example.com", api_token="secret-token", page_size=2)
    storage = StorageConfig(bucket="test-bucket", region="us-east-1")
    return Marketplace(config, transport=transport, storage=storage)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def ctx(marketplace, output):
    return CommandContext(
        marketplace=marketplace,
        renderer=TableRenderer(use_colors=False),
        output=output,
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by cli.main so they do not outlive captured streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
