import pytest

from fakes import FakeShopifyClient, make_product
from option_tools.catalog import fetch_all_products, filter_products
from option_tools.exceptions import ShopifyTransportError
from option_tools.models import Product


def _nodes(count):
    return [make_product(str(i), f"Product {i}", [("Size", ["S"])]) for i in range(count)]


def test_two_pages_accumulate_260_products():
    client = FakeShopifyClient(_nodes(260))

    products = fetch_all_products(client)

    assert len(products) == 260
    assert [p.title for p in products] == [f"Product {i}" for i in range(260)]
    assert len({p.id for p in products}) == 260


def test_next_page_uses_last_edge_cursor():
    client = FakeShopifyClient(_nodes(260))

    fetch_all_products(client)

    assert client.page_requests == [(250, None), (250, "cursor:249")]


def test_single_page_stops_without_second_request():
    client = FakeShopifyClient(_nodes(3))

    products = fetch_all_products(client)

    assert len(products) == 3
    assert client.page_requests == [(250, None)]


def test_empty_store_returns_empty_list():
    client = FakeShopifyClient([])

    assert fetch_all_products(client) == []


def test_small_page_size_walks_every_page():
    client = FakeShopifyClient(_nodes(7))

    products = fetch_all_products(client, page_size=3)

    assert len(products) == 7
    assert len(client.page_requests) == 3


def test_transport_error_aborts_read():
    client = FakeShopifyClient(_nodes(300), fail_on_page=1)

    with pytest.raises(ShopifyTransportError):
        fetch_all_products(client)


class _StuckClient:
    """Claims more pages exist but returns no edges."""

    def __init__(self):
        self.requests = 0

    def get_products_page(self, first=250, after=None):
        self.requests += 1
        return {"edges": [], "pageInfo": {"hasNextPage": True}}


def test_next_page_flag_with_no_edges_stops():
    client = _StuckClient()

    assert fetch_all_products(client) == []
    assert client.requests == 1


class _NullCursorClient:
    """Claims more pages exist but the last edge carries no cursor."""

    def __init__(self):
        self.afters = []

    def get_products_page(self, first=250, after=None):
        self.afters.append(after)
        node = make_product("1", "Only Product", [("Size", ["S"])])
        return {"edges": [{"cursor": None, "node": node}], "pageInfo": {"hasNextPage": True}}


def test_next_page_flag_with_null_cursor_stops():
    client = _NullCursorClient()

    products = fetch_all_products(client)

    assert [p.title for p in products] == ["Only Product"]
    assert client.afters == [None]


def test_products_parsed_into_snapshot(catalog_nodes, fake_client):
    products = fetch_all_products(fake_client)

    assert all(isinstance(p, Product) for p in products)
    coffee = products[1]
    assert coffee.options[0].name == "Pack weight"
    assert coffee.options[0].position == 1
    assert coffee.options[0].value_names == ["250g", "500g", "1kg"]


def test_filter_products_blank_term_returns_all(fake_client):
    products = fetch_all_products(fake_client)

    assert filter_products(products, "") == products
    assert filter_products(products, "   ") == products
    assert filter_products(products, None) == products


def test_filter_products_matches_substring_case_insensitively(fake_client):
    products = fetch_all_products(fake_client)

    assert [p.title for p in filter_products(products, "WEIGHT")] == ["Coffee Beans"]
    assert [p.title for p in filter_products(products, "col")] == ["Wool Sweater"]
    assert filter_products(products, "Material") == []
