#!/usr/bin/env python3
"""
catalog.py

Reads the full product catalog (with options and option values) by
walking the products connection page by page.

Pages are fetched strictly in sequence: each request needs the cursor
of the last edge of the previous page.
"""

import logging

from option_tools.models import Product
from option_tools.shopify_client import ShopifyClient

logger = logging.getLogger(__name__)

PAGE_SIZE = 250


def fetch_all_products(client: ShopifyClient, page_size: int = PAGE_SIZE) -> list:
    """
    Returns every product in the store, in API order, as `Product` objects.
    Any transport error propagates and aborts the read.
    """
    products = []
    has_next_page = True
    cursor = None

    logger.info("Starting fetch of all products")
    while has_next_page:
        data = client.get_products_page(first=page_size, after=cursor)
        edges = data.get("edges", [])
        for edge in edges:
            products.append(Product.from_node(edge.get("node", {})))

        has_next_page = data.get("pageInfo", {}).get("hasNextPage", False)
        if has_next_page and not edges:
            logger.warning("API reported another page but returned no edges; stopping pagination.")
            break
        cursor = edges[-1].get("cursor") if has_next_page else None
        if has_next_page and not cursor:
            logger.warning("API reported another page but the last edge has no cursor; stopping pagination.")
            break
        logger.info("Fetched batch, total so far: %d, hasNext: %s", len(products), has_next_page)

    logger.info("Completed fetch, total products: %d", len(products))
    return products


def filter_products(products: list, search_term: str | None) -> list:
    """Products with an option name containing `search_term`; all products if the term is blank."""
    term = (search_term or "").strip()
    if not term:
        return list(products)
    return [p for p in products if p.find_option_containing(term) is not None]
