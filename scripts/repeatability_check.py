#!/usr/bin/env python3
"""
Repeatability harness: store and score the same receipt N times; assert identical results.
Exits 0 if stable, 1 if unstable. Prints variance report on failure.

Each run goes through a ReceiptStore (put then get) before scoring, and with
--threads > 1 the runs execute concurrently, so the check also covers the
store's concurrent put/get path.

Usage: python scripts/repeatability_check.py [--runs 100] [--threads 8] [--receipt path]
"""

import argparse
import json
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.models import Receipt
from src.scoring import score_breakdown
from src.storage import ReceiptStore
from src.utils import hash_payload

DEFAULT_RUNS = 100
DEFAULT_THREADS = 8
DEFAULT_RECEIPT = "examples/target.json"


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--runs", type=int, default=DEFAULT_RUNS)
    parser.add_argument("--threads", type=int, default=DEFAULT_THREADS)
    parser.add_argument("--receipt", default=DEFAULT_RECEIPT)
    args = parser.parse_args()

    root = Path(__file__).resolve().parent.parent
    receipt_path = root / args.receipt
    if not receipt_path.exists():
        print(f"Error: Receipt file not found: {receipt_path}", file=sys.stderr)
        sys.exit(1)

    payload = json.loads(receipt_path.read_text(encoding="utf-8"))
    receipt = Receipt.from_dict(payload)
    store = ReceiptStore()

    def run_once(_):
        receipt_id = store.put(receipt)
        stored = store.get(receipt_id)
        breakdown = score_breakdown(stored)
        return {
            "receipt_id": receipt_id,
            "same_receipt": stored == receipt,
            "points": sum(breakdown.values()),
            "breakdown": breakdown,
        }

    print(f"Scoring {receipt_path.name} {args.runs} times on {args.threads} thread(s)...")
    with ThreadPoolExecutor(max_workers=max(1, args.threads)) as pool:
        results = list(pool.map(run_once, range(args.runs)))

    first = results[0]
    variances = []

    ids = [r["receipt_id"] for r in results]
    if len(set(ids)) != len(ids):
        variances.append(("receipt_ids", "-", f"{len(ids) - len(set(ids))} duplicate id(s)"))
    if len(store) != args.runs:
        variances.append(("store_size", "-", f"{len(store)} != {args.runs}"))

    for i, r in enumerate(results, start=1):
        if not r["same_receipt"]:
            variances.append(("stored_receipt", i, "get() returned a different receipt"))
        if r["points"] != first["points"]:
            variances.append(("points", i, f"{r['points']} != {first['points']}"))
        if r["breakdown"] != first["breakdown"]:
            diff = {
                k: (r["breakdown"].get(k), first["breakdown"].get(k))
                for k in first["breakdown"]
                if r["breakdown"].get(k) != first["breakdown"].get(k)
            }
            variances.append(("breakdown", i, f"diff: {diff}"))

    if variances:
        points = [x["points"] for x in results]
        print("\n=== VARIANCE REPORT ===\n")
        print(f"Runs: {args.runs} | Threads: {args.threads}")
        print(f"Points range: min={min(points)}, max={max(points)}")
        print()
        for stage, run, detail in variances:
            print(f"  Run {run} - {stage}: {detail}")
        print("\nRepeatability check FAILED.")
        sys.exit(1)

    print("\nPASS: Repeatability check passed.")
    print("\n--- Provenance ---")
    print(f"  receipt_file: {receipt_path}")
    print(f"  receipt_hash: {hash_payload(payload)}")
    print("\n--- Run metrics ---")
    print(f"  runs: {args.runs}")
    print(f"  threads: {args.threads}")
    print(f"  points: {first['points']}")
    for rule, pts in first["breakdown"].items():
        print(f"    {rule}: {pts}")
    sys.exit(0)


if __name__ == "__main__":
    main()
