#!/usr/bin/env python3
"""
list_products.py

Fetches every product with its options and prints them, optionally
filtered to products having an option whose name contains --search.
Can also save the snapshot as a CSV report (one row per product option).

Usage:
    python -m option_tools.list_products
    python -m option_tools.list_products --search "pack weight" --export-csv outputs/pack_weight.csv
"""

import argparse
import pathlib
import sys

import pandas as pd

from option_tools.catalog import fetch_all_products, filter_products
from option_tools.common import plural, setup_logging
from option_tools.exceptions import ShopifyTransportError
from option_tools.shopify_client import ShopifyClient

CSV_COLUMNS = ["Product ID", "Title", "Option", "Position", "Values"]


def summary_line(total: int, matched: int, search_term: str | None) -> str:
    term = (search_term or "").strip()
    if not term:
        return f"Total Products: {total}"
    verb = "matches" if matched == 1 else "match"
    return f"{plural(matched)} {verb} \"{term}\""


def products_to_dataframe(products: list) -> pd.DataFrame:
    rows = [row for p in products for row in p.to_rows()]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def export_csv(products: list, output_path) -> pathlib.Path:
    output_path = pathlib.Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = products_to_dataframe(products)
    df.to_csv(output_path, index=False)
    return output_path


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="List all products and their options.")
    parser.add_argument('--search', help='(Optional) Only show products with an option name containing this text.')
    parser.add_argument('--export-csv', help='(Optional) Save the listed products and options to this CSV path.')
    parser.add_argument('--quiet', action='store_true', help='Only print the summary line.')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging.')
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        client = ShopifyClient()
        products = fetch_all_products(client)
    except (EnvironmentError, ShopifyTransportError) as e:
        print(f"❌ Error: Could not fetch products: {e}", file=sys.stderr)
        return 1

    listed = filter_products(products, args.search)
    print(summary_line(len(products), len(listed), args.search))

    if not args.quiet:
        for product in listed:
            print(f"\n{product.title}")
            for option in product.options:
                print(f"  {option.name}: {', '.join(option.value_names)}")

    if args.export_csv:
        path = export_csv(listed, args.export_csv)
        print(f"\n✅ Successfully saved report to: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
