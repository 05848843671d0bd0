#!/usr/bin/env python3
"""
option_adder.py

Adds a named option (e.g. "Color") with a fixed list of values to every
product in the store that does not already have an option of that name.
Existing variants are left as they are.

A product is "missing" the option when none of its option names equals
the requested name, ignoring case.

Each product gets its own mutation, one after another. User errors are
collected and the loop carries on; successful additions are not undone
when a later product fails.

Usage:
    python -m option_tools.option_adder --option-name Color --values Red Green Yellow [--dry-run]
    python -m option_tools.option_adder --option-name Color --values Red Green Yellow --results-json outputs/add_color.json
"""

import argparse
import json
import logging
import sys

from option_tools.catalog import fetch_all_products
from option_tools.common import (
    plural,
    setup_logging,
    user_error_messages,
    write_aborted_results_json,
    write_results_json,
)
from option_tools.exceptions import OptionValidationError, ShopifyTransportError
from option_tools.models import BulkResult
from option_tools.shopify_client import ShopifyClient

logger = logging.getLogger(__name__)

# The CLI mirrors the store admin form, which always asks for three values.
# The workflow itself accepts any non-empty list.
REQUIRED_CLI_VALUES = 3


def validate_option_name(option_name) -> str:
    name = (option_name or "").strip()
    if not name:
        raise OptionValidationError("Please enter an option name.")
    return name


def parse_values(raw) -> list:
    """
    Accepts a list of strings or a JSON array string (e.g. '["Red","Green"]').
    Returns the non-blank values, stripped, in their original order.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise OptionValidationError("Please provide three values.")

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Error parsing values JSON: %s", e)
            raise OptionValidationError("Invalid values format.") from e

    if not isinstance(raw, (list, tuple)):
        raise OptionValidationError("Invalid values format.")

    values = []
    for v in raw:
        if not isinstance(v, str):
            raise OptionValidationError("Invalid values format.")
        if v.strip():
            values.append(v.strip())

    if not values:
        raise OptionValidationError("Please provide three values.")
    return values


def products_missing_option(products: list, option_name: str) -> list:
    """Products with no option whose name equals `option_name` (case-insensitive)."""
    return [p for p in products if not p.has_option_named(option_name)]


def add_option_to_missing(client: ShopifyClient, products: list, option_name: str,
                          values, dry_run: bool = False, jobs: list | None = None) -> BulkResult:
    """
    Creates `option_name` with `values` on every product that lacks it.
    `BulkResult.count` is the number of products where the call reported
    no user errors (or, in a dry run, the number that would be changed).
    Per-product outcomes are appended to `jobs` when a list is passed in,
    so the caller still has them if a transport error aborts the run.
    """
    option_name = validate_option_name(option_name)
    values = parse_values(values)

    to_add = products_missing_option(products, option_name)
    logger.info("Products missing \"%s\": %d", option_name, len(to_add))

    option_input = [{"name": option_name, "values": [{"name": v} for v in values]}]
    errors = []
    jobs = [] if jobs is None else jobs
    added = 0

    for product in to_add:
        if dry_run:
            logger.info("[dry-run] Would add \"%s\" %s to %s - %s", option_name, values, product.id, product.title)
            jobs.append({"product_id": product.id, "title": product.title, "action": "create", "status": "dry-run"})
            added += 1
            continue

        logger.info("Adding option to product: %s - %s", product.id, product.title)
        user_errors = client.create_product_options(product.id, option_input)
        if user_errors:
            logger.error("Errors for %s: %s", product.id, user_errors)
            messages = user_error_messages(user_errors)
            errors.extend(messages)
            jobs.append({"product_id": product.id, "title": product.title, "action": "create",
                         "status": "failed", "errors": messages})
        else:
            logger.info("Successfully added to %s", product.id)
            jobs.append({"product_id": product.id, "title": product.title, "action": "create", "status": "created"})
            added += 1

    if errors:
        logger.error("Completed with errors: %s", errors)
        return BulkResult(success=False, count=added, errors=errors, jobs=jobs)

    logger.info("All done, added to %d products", added)
    return BulkResult(success=True, count=added, jobs=jobs)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Add an option to every product that does not have it yet.")
    parser.add_argument('--option-name', required=True, help='Option to add (e.g., "Color").')
    parser.add_argument('--values', nargs='+', required=True,
                        help=f'Exactly {REQUIRED_CLI_VALUES} option values (e.g., Red Green Yellow).')
    parser.add_argument('--dry-run', action='store_true', help='Report what would change without calling any mutation.')
    parser.add_argument('--results-json', help='(Optional) Path to save a JSON log of the run.')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging.')
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        option_name = validate_option_name(args.option_name)
        values = parse_values(args.values)
        if len(values) != REQUIRED_CLI_VALUES:
            raise OptionValidationError("Please provide three values.")
    except OptionValidationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    jobs = []
    try:
        client = ShopifyClient()
        # Always re-read the catalog; never act on an older snapshot.
        products = fetch_all_products(client)
        result = add_option_to_missing(client, products, option_name, values, dry_run=args.dry_run, jobs=jobs)
    except (EnvironmentError, ShopifyTransportError) as e:
        print(f"❌ Aborted: {e}", file=sys.stderr)
        if args.results_json:
            log_path = write_aborted_results_json(args.results_json, option_name, jobs, e, done_status="created")
            print(f"🗂  Partial results log saved to → {log_path}")
        return 1

    if args.results_json:
        log_path = write_results_json(args.results_json, option_name, result)
        print(f"🗂  Results log saved to → {log_path}")

    if not result.success:
        print(f"❌ {result.error_message}", file=sys.stderr)
        return 1

    prefix = "[dry-run] Would add" if args.dry_run else "✅ Added"
    print(f"{prefix} \"{option_name}\" to {plural(result.count)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
