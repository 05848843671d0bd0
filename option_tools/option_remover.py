#!/usr/bin/env python3
"""
option_remover.py

Removes an option from every product that has one whose name CONTAINS
the given term (case-insensitive). Only the first matching option on a
product is removed.

Removal is two steps per product:
  1. If the option has more than one value, delete every value except the
     first (variants using those values are deleted with them).
  2. Delete the now single-value option.

If step 1 reports user errors, step 2 is skipped for that product. If
step 2 fails after step 1 succeeded, the product is left with a
single-value option. Nothing is rolled back.

Usage:
    python -m option_tools.option_remover --option-name "Pack weight" [--dry-run]
    python -m option_tools.option_remover --option-name "Pack weight" --yes --results-json outputs/remove.json
"""

import argparse
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
from option_tools.option_adder import validate_option_name
from option_tools.shopify_client import ShopifyClient

logger = logging.getLogger(__name__)


def products_with_option(products: list, term: str) -> list:
    """(product, option) pairs for products having an option whose name contains `term`."""
    matches = []
    for product in products:
        option = product.find_option_containing(term)
        if option is not None:
            matches.append((product, option))
    return matches


def _trim_values(client: ShopifyClient, product, option) -> list:
    """Deletes all values but the first. Returns user error messages."""
    to_delete = [v.id for v in option.values[1:]]
    logger.info("Removing extra values from \"%s\": %s", product.title, to_delete)
    user_errors = client.update_product_option(
        product.id,
        {"id": option.id, "name": option.name, "position": option.position},
        to_delete,
    )
    if user_errors:
        logger.error("Error updating \"%s\": %s", product.title, user_errors)
    return user_error_messages(user_errors)


def _delete_option(client: ShopifyClient, product, option) -> list:
    logger.info("Deleting option from \"%s\": %s", product.title, option.id)
    payload = client.delete_product_options(product.id, [option.id])
    user_errors = payload.get("userErrors", [])
    if user_errors:
        logger.error("Error deleting from \"%s\": %s", product.title, user_errors)
    else:
        logger.info("Deleted option \"%s\" from \"%s\"", option.name, product.title)
    return user_error_messages(user_errors)


def remove_option(client: ShopifyClient, products: list, term: str, dry_run: bool = False,
                  jobs: list | None = None) -> BulkResult:
    """
    Removes the first option matching `term` from each product.
    `BulkResult.count` is the number of products whose option was deleted.
    Per-product outcomes are appended to `jobs` when a list is passed in.
    """
    term = validate_option_name(term)
    errors = []
    jobs = [] if jobs is None else jobs
    removed = 0

    for product, option in products_with_option(products, term):
        job = {"product_id": product.id, "title": product.title, "option_id": option.id,
               "option_name": option.name}

        if dry_run:
            trim = max(len(option.values) - 1, 0)
            logger.info("[dry-run] Would remove \"%s\" from \"%s\" (trimming %d value(s) first)",
                        option.name, product.title, trim)
            jobs.append({**job, "action": "delete", "status": "dry-run"})
            removed += 1
            continue

        if len(option.values) > 1:
            trim_errors = _trim_values(client, product, option)
            if trim_errors:
                errors.extend(trim_errors)
                jobs.append({**job, "action": "trim_values", "status": "failed", "errors": trim_errors})
                continue
            jobs.append({**job, "action": "trim_values", "status": "trimmed"})

        delete_errors = _delete_option(client, product, option)
        if delete_errors:
            errors.extend(delete_errors)
            jobs.append({**job, "action": "delete", "status": "failed", "errors": delete_errors})
        else:
            jobs.append({**job, "action": "delete", "status": "deleted"})
            removed += 1

    if errors:
        return BulkResult(success=False, count=removed, errors=errors, jobs=jobs)
    return BulkResult(success=True, count=removed, jobs=jobs)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Remove an option (matched by name substring) from all products.")
    parser.add_argument('--option-name', required=True, help='Text contained in the option name (e.g., "Pack weight").')
    parser.add_argument('--dry-run', action='store_true', help='Report what would change without calling any mutation.')
    parser.add_argument('--yes', action='store_true', help='Skip the confirmation prompt.')
    parser.add_argument('--results-json', help='(Optional) Path to save a JSON log of the run.')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging.')
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        term = validate_option_name(args.option_name)
    except OptionValidationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    try:
        client = ShopifyClient()
        products = fetch_all_products(client)
    except (EnvironmentError, ShopifyTransportError) as e:
        print(f"❌ Aborted: {e}", file=sys.stderr)
        return 1

    matched = products_with_option(products, term)
    print(f"{plural(len(matched))} match \"{term}\"")
    if not matched:
        print("✅ Nothing to remove.")
        return 0

    if not args.dry_run and not args.yes:
        print("--- WARNING: This is NOT a dry run. ---")
        print(f"This will delete the option and any variants that depend on its extra values on {plural(len(matched))}.")
        try:
            confirm = input("Are you absolutely sure you want to continue? (yes/no): ")
        except EOFError:
            # stdin closed, e.g. cron: treat as "no"
            confirm = ""
        if confirm.lower() != 'yes':
            print("Aborting.")
            return 1

    jobs = []
    try:
        result = remove_option(client, products, term, dry_run=args.dry_run, jobs=jobs)
    except (EnvironmentError, ShopifyTransportError) as e:
        print(f"❌ Aborted: {e}", file=sys.stderr)
        if args.results_json:
            log_path = write_aborted_results_json(args.results_json, term, jobs, e, done_status="deleted")
            print(f"🗂  Partial results log saved to → {log_path}")
        return 1

    if args.results_json:
        log_path = write_results_json(args.results_json, term, result)
        print(f"🗂  Results log saved to → {log_path}")

    if not result.success:
        print(f"❌ {result.error_message}", file=sys.stderr)
        return 1

    prefix = "[dry-run] Would remove" if args.dry_run else "✅ Removed"
    print(f"{prefix} \"{term}\" from {plural(result.count)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
