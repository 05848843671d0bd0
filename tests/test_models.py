from fakes import make_product
from option_tools.models import BulkResult, Product


def _product():
    return Product.from_node(make_product("9", "Tea", [("Pack Weight", ["50g", "100g"]), ("Pack size", ["1"])]))


def test_has_option_named_is_exact_and_case_insensitive():
    product = _product()

    assert product.has_option_named("pack weight")
    assert product.has_option_named("PACK WEIGHT")
    assert not product.has_option_named("weight")


def test_find_option_containing_returns_first_match():
    product = _product()

    assert product.find_option_containing("pack").name == "Pack Weight"
    assert product.find_option_containing("SIZE").name == "Pack size"
    assert product.find_option_containing("color") is None


def test_from_node_tolerates_missing_lists():
    product = Product.from_node({"id": "gid://shopify/Product/1", "title": "Bare", "options": None})

    assert product.options == ()
    assert product.to_rows() == []


def test_to_rows_flattens_options():
    rows = _product().to_rows()

    assert rows[0] == {
        "Product ID": "gid://shopify/Product/9",
        "Title": "Tea",
        "Option": "Pack Weight",
        "Position": 1,
        "Values": "50g, 100g",
    }
    assert len(rows) == 2


def test_bulk_result_joins_errors():
    result = BulkResult(success=False, errors=["Option already exists", "Too many options"])

    assert result.error_message == "Option already exists; Too many options"
    assert BulkResult(success=True, count=2).error_message is None
