#!/usr/bin/env python3
"""CLI for scoring receipt JSON files without running the web service."""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.models import Receipt
from src.scoring import score_breakdown
from src.validation import InvalidReceiptError, validate_receipt


def _load_receipt(path: Path, validate: bool) -> Receipt:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if validate:
        validate_receipt(payload)
    return Receipt.from_dict(payload)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(
        description="Compute reward points for one or more receipt JSON files."
    )
    parser.add_argument(
        "receipts",
        type=Path,
        nargs="+",
        help="Path(s) to receipt JSON files",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON",
    )
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip schema validation and score whatever fields are present",
    )

    args = parser.parse_args(argv)

    results = []
    for path in args.receipts:
        if not path.exists():
            print(f"Error: Receipt file not found: {path}", file=sys.stderr)
            return 1
        try:
            receipt = _load_receipt(path, validate=not args.no_validate)
        except json.JSONDecodeError as e:
            print(f"Error: {path} is not valid JSON: {e}", file=sys.stderr)
            return 1
        except InvalidReceiptError as e:
            print(f"Error: {path} is not a valid receipt: {e}", file=sys.stderr)
            return 1
        except KeyError as e:
            print(f"Error: {path} is missing field {e}", file=sys.stderr)
            return 1
        except TypeError as e:
            print(f"Error: {path} does not have the shape of a receipt: {e}", file=sys.stderr)
            return 1

        breakdown = score_breakdown(receipt)
        results.append({
            "file": str(path),
            "retailer": receipt.retailer,
            "points": sum(breakdown.values()),
            "breakdown": breakdown,
        })

    if args.json:
        print(json.dumps(results, indent=2))
        return 0

    for r in results:
        print(f"=== {r['file']} ({r['retailer']}) ===")
        for rule, points in r["breakdown"].items():
            print(f"  {rule.replace('_', ' ').title():<24} {points:>5}")
        print(f"  {'Total':<24} {r['points']:>5}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
