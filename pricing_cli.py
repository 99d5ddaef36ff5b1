#!/usr/bin/env python
"""
Command-line interface for the Medicare pricing API.

Quick tool for pricing claims stored as JSON and for checking which headers
a pricing configuration sends.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from medicare_pricing import Claim, Client, PriceConfig, Pricing, get_headers

API_KEY_ENV = "MPH_API_KEY"

_CLAIMS = TypeAdapter(List[Claim])


def build_config(args) -> PriceConfig:
    """Build a PriceConfig from the pricing option flags."""
    return PriceConfig(
        is_commercial=args.commercial,
        include_edits=args.include_edits,
        use_drg_from_grouper=args.drg_from_grouper,
        use_best_drg_price=args.best_drg_price,
        override_threshold=args.override_threshold,
        continue_on_edit_fail=args.continue_on_edit_fail,
        allow_partial_results=args.allow_partial_results,
        contract_ruleset=args.contract_ruleset,
    )


def load_claims(path: str) -> List[Claim]:
    """Read one claim (JSON object) or several (JSON array) from a file."""
    data = json.loads(Path(path).read_text())
    if isinstance(data, list):
        return _CLAIMS.validate_python(data)
    return [Claim.model_validate(data)]


def make_client(args) -> Client:
    api_key = args.api_key or os.environ.get(API_KEY_ENV, "")
    if not api_key:
        print(f"\nERROR: an API key is required (--api-key or {API_KEY_ENV})", file=sys.stderr)
        sys.exit(1)
    return Client(is_test=args.test, api_key=api_key)


def print_pricing(label: str, pricing: Pricing) -> None:
    print("\n" + "=" * 60)
    print(f"PRICING RESULT: {label}")
    print("=" * 60)
    if pricing.medicare_amount is not None:
        print(f"Medicare Amount: ${pricing.medicare_amount:.2f}")
    if pricing.allowed_amount is not None:
        print(f"Allowed Amount:  ${pricing.allowed_amount:.2f}")
    if pricing.medicare_source:
        print(f"Source:          {pricing.medicare_source}")
    note = pricing.get_repricing_note()
    if note:
        print(f"\nNotes: {note}")
    print("=" * 60)


def report_results(claims: List[Claim], results: List[Optional[Pricing]]) -> None:
    """Print each returned pricing next to the claim it belongs to."""
    if not any(pricing is not None for pricing in results):
        print("\nNo pricing results returned.")
        return

    for claim, pricing in zip(claims, results):
        if pricing is None:
            continue
        print_pricing(claim.claim_id or "(no claim ID)", pricing)
    print()


def show_headers(args):
    """Print the headers a configuration renders to."""
    headers = get_headers(build_config(args))
    if not headers:
        print("(no headers)")
    for name, value in sorted(headers.items()):
        print(f"{name}: {value}")


def price_claims(args):
    """Price the claims in a JSON file."""
    try:
        claims = load_claims(args.claims)
    except (OSError, ValueError, ValidationError) as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        sys.exit(1)

    config = build_config(args)
    with make_client(args) as client:
        if len(claims) == 1:
            pricing, error = client.price(config, claims[0]).unwrap()
            results = [pricing]
        else:
            results, error = client.price_batch(config, *claims).unwrap()

    if error is not None:
        print(f"\nERROR: {error}", file=sys.stderr)
        sys.exit(1)

    report_results(claims, results)


def estimate_claims(args):
    """Estimate the claims in a JSON file."""
    try:
        claims = load_claims(args.claims)
    except (OSError, ValueError, ValidationError) as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        sys.exit(1)

    with make_client(args) as client:
        results, error = client.estimate_claims(*claims).unwrap()

    if error is not None:
        print(f"\nERROR: {error}", file=sys.stderr)
        sys.exit(1)

    report_results(claims, results)


def add_config_arguments(parser):
    parser.add_argument('--commercial', action='store_true', help='Use commercial code crosswalks')
    parser.add_argument('--include-edits', action='store_true', help='Include edit details in the response')
    parser.add_argument('--drg-from-grouper', action='store_true', help='Always use the DRG from the grouper')
    parser.add_argument('--best-drg-price', action='store_true', help='Use the best of the claim and grouper DRG prices')
    parser.add_argument('--override-threshold', type=float, default=0.0, help='Override edit failures up to this amount')
    parser.add_argument('--continue-on-edit-fail', action='store_true', help='Keep pricing when edits fail')
    parser.add_argument('--allow-partial-results', action='store_true', help='Return partially priced claims')
    parser.add_argument('--contract-ruleset', default='', help='Ruleset to use for contract pricing')


def add_client_arguments(parser):
    parser.add_argument('--api-key', help=f'API key (default: ${API_KEY_ENV})')
    parser.add_argument('--test', action='store_true', help='Use the test environment')


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Medicare Pricing API CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the headers sent for a configuration
  %(prog)s headers --commercial --override-threshold 300

  # Price a claim with edit details
  %(prog)s price claim.json --include-edits

  # Estimate a batch of claims against the test environment
  %(prog)s estimate claims.json --test
        """
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    headers_parser = subparsers.add_parser('headers', help='Show the headers a configuration sends')
    add_config_arguments(headers_parser)
    headers_parser.set_defaults(func=show_headers)

    price_parser = subparsers.add_parser('price', help='Price claims from a JSON file')
    price_parser.add_argument('claims', help='JSON file holding a claim or an array of claims')
    add_config_arguments(price_parser)
    add_client_arguments(price_parser)
    price_parser.set_defaults(func=price_claims)

    estimate_parser = subparsers.add_parser('estimate', help='Estimate claims from a JSON file')
    estimate_parser.add_argument('claims', help='JSON file holding a claim or an array of claims')
    add_client_arguments(estimate_parser)
    estimate_parser.set_defaults(func=estimate_claims)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == '__main__':
    main()
