#!/usr/bin/env python3
"""
shopify_client.py
Central GraphQL helper for the bulk option tools.
Reads SHOP_URL, SHOPIFY_ACCESS_TOKEN, API_VERSION from .env
(unless passed explicitly) and exposes a `ShopifyClient` class.
"""

import os
import time
import logging
import requests
from dotenv import load_dotenv

from option_tools.exceptions import ShopifyTransportError

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2025-10"
THROTTLE_FLOOR = 1000
THROTTLE_PAUSE_SECONDS = 2


PRODUCTS_WITH_OPTIONS_QUERY = """
query AllProducts($first: Int!, $after: String) {
  products(first: $first, after: $after) {
    edges {
      cursor
      node {
        id
        title
        options {
          id
          name
          position
          optionValues {
            id
            name
          }
        }
      }
    }
    pageInfo {
      hasNextPage
    }
  }
}
"""

# LEAVE_AS_IS: existing variants are not touched by the new option
CREATE_OPTIONS_MUTATION = """
mutation addOption($productId: ID!, $options: [OptionCreateInput!]!) {
  productOptionsCreate(productId: $productId, options: $options, variantStrategy: LEAVE_AS_IS) {
    userErrors {
      field
      message
    }
  }
}
"""

# MANAGE: variants using a deleted value are deleted too
UPDATE_OPTION_MUTATION = """
mutation updateOptionValues($productId: ID!, $option: OptionUpdateInput!, $optionValuesToDelete: [ID!]!) {
  productOptionUpdate(
    productId: $productId,
    option: $option,
    optionValuesToDelete: $optionValuesToDelete,
    variantStrategy: MANAGE
  ) {
    userErrors {
      field
      message
      code
    }
  }
}
"""

DELETE_OPTIONS_MUTATION = """
mutation deleteOptions($productId: ID!, $options: [ID!]!) {
  productOptionsDelete(productId: $productId, options: $options) {
    deletedOptionsIds
    userErrors {
      field
      message
      code
    }
  }
}
"""


class ShopifyClient:
    def __init__(self, shop_url: str | None = None, token: str | None = None,
                 api_version: str | None = None, session: requests.Session | None = None):
        load_dotenv()
        self.shop_url = (shop_url or os.getenv("SHOP_URL", "")).rstrip("/")
        self.token = token or os.getenv("SHOPIFY_ACCESS_TOKEN")
        self.api_version = api_version or os.getenv("API_VERSION", DEFAULT_API_VERSION)
        if not all([self.shop_url, self.token]):
            raise EnvironmentError("Missing SHOP_URL or SHOPIFY_ACCESS_TOKEN in .env")

        self.endpoint = f"{self.shop_url}/admin/api/{self.api_version}/graphql.json"
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self.token,
        })

    # ------------------------------------------------------------------
    def graphql(self, query: str, variables: dict | None = None) -> dict:
        """Perform a GraphQL POST with throttle awareness. No retries."""
        payload = {"query": query, "variables": variables or {}}
        resp = self.session.post(self.endpoint, json=payload)
        if resp.status_code != 200:
            raise ShopifyTransportError(f"GraphQL HTTP {resp.status_code}: {resp.text}")

        data = resp.json()
        if data.get("errors"):
            messages = "; ".join(e.get("message", str(e)) for e in data["errors"])
            raise ShopifyTransportError(f"GraphQL API returned errors: {messages}")

        available = (
            data.get("extensions", {})
            .get("cost", {})
            .get("throttleStatus", {})
            .get("currentlyAvailable")
        )
        if available is not None and available < THROTTLE_FLOOR:
            logger.debug("Throttle budget low (%s), pausing %ss", available, THROTTLE_PAUSE_SECONDS)
            time.sleep(THROTTLE_PAUSE_SECONDS)
        return data

    # ------------------------------------------------------------------
    # --- Products and options ---
    # ------------------------------------------------------------------

    def get_products_page(self, first: int = 250, after: str | None = None) -> dict:
        """
        Fetches one page of products with their options and option values.
        Returns the raw `products` connection: {"edges": [...], "pageInfo": {...}}.
        """
        response = self.graphql(PRODUCTS_WITH_OPTIONS_QUERY, {"first": first, "after": after})
        data = (response.get("data") or {}).get("products")
        if data is None:
            # Usually a missing 'read_products' scope
            raise ShopifyTransportError("The 'products' key was not found in the GraphQL response.")
        return data

    def create_product_options(self, product_gid: str, options: list) -> list:
        """
        Adds options to a product without creating or modifying variants.
        `options` is a list of OptionCreateInput dicts:
            [{"name": "Color", "values": [{"name": "Red"}, ...]}]
        Returns the list of userErrors (empty on success).
        """
        variables = {"productId": product_gid, "options": options}
        response = self.graphql(CREATE_OPTIONS_MUTATION, variables)
        data = (response.get("data") or {}).get("productOptionsCreate") or {}
        return data.get("userErrors", [])

    def update_product_option(self, product_gid: str, option: dict, option_values_to_delete: list) -> list:
        """
        Deletes the given option value ids from an option. Variants that
        depend on a deleted value are deleted as well.
        Returns the list of userErrors (empty on success).
        """
        variables = {
            "productId": product_gid,
            "option": option,
            "optionValuesToDelete": option_values_to_delete,
        }
        response = self.graphql(UPDATE_OPTION_MUTATION, variables)
        data = (response.get("data") or {}).get("productOptionUpdate") or {}
        return data.get("userErrors", [])

    def delete_product_options(self, product_gid: str, option_gids: list) -> dict:
        """
        Deletes options from a product.
        Returns {"deletedOptionsIds": [...], "userErrors": [...]}.
        """
        variables = {"productId": product_gid, "options": option_gids}
        response = self.graphql(DELETE_OPTIONS_MUTATION, variables)
        data = (response.get("data") or {}).get("productOptionsDelete") or {}
        return {
            "deletedOptionsIds": data.get("deletedOptionsIds") or [],
            "userErrors": data.get("userErrors", []),
        }
