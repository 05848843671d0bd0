"""Pytest fixtures for the option tools."""

import pytest

from fakes import FakeShopifyClient, make_product


@pytest.fixture
def catalog_nodes():
    """Three products; two of them lack a "Color" option."""
    return [
        make_product("1", "Wool Sweater", [("Size", ["S", "M", "L"]), ("color", ["Navy"])]),
        make_product("2", "Coffee Beans", [("Pack weight", ["250g", "500g", "1kg"])]),
        make_product("3", "Gift Card", []),
    ]


@pytest.fixture
def fake_client(catalog_nodes):
    return FakeShopifyClient(catalog_nodes)


@pytest.fixture
def patch_client(monkeypatch):
    """Makes the CLI entry points build the given fake instead of a real client."""
    def _patch(module, client):
        monkeypatch.setattr(module, "ShopifyClient", lambda: client)
        return client
    return _patch
