"""Audit trail for API operations and awarded points."""

import csv
import json
import logging
import os
import threading
from pathlib import Path

from src.utils import iso_now

AUDIT_DIR = Path(os.environ.get("RECEIPT_LOG_DIR") or Path(__file__).resolve().parent.parent / "logs")

# Serializes appends from concurrent request threads (one CSV header, no interleaved lines).
_write_lock = threading.Lock()

CSV_HEADERS = [
    "timestamp",
    "receipt_id",
    "receipt_hash",
    "retailer",
    "num_items",
    "points",
    "retailer_name",
    "round_dollar_total",
    "quarter_multiple_total",
    "item_pairs",
    "item_descriptions",
    "total_over_ten",
    "odd_purchase_day",
    "afternoon_purchase",
]


def _ensure_log_dir() -> Path:
    AUDIT_DIR.mkdir(parents=True, exist_ok=True)
    return AUDIT_DIR


def log_points_awarded(
    *,
    receipt_id: str,
    receipt_hash: str,
    retailer: str,
    num_items: int,
    points: int,
    breakdown: dict[str, int],
):
    """
    Record a scoring outcome for later review: when, which receipt, and how
    many points each rule contributed.
    Writes to points_history.jsonl (append) and points_history.csv.
    """
    log_dir = _ensure_log_dir()
    entry = {
        "timestamp": iso_now(),
        "receipt_id": receipt_id,
        "receipt_hash": receipt_hash,
        "retailer": retailer,
        "num_items": num_items,
        "points": points,
        "breakdown": breakdown,
    }

    row = {k: v for k, v in entry.items() if k != "breakdown"}
    row.update(breakdown)
    csv_path = log_dir / "points_history.csv"

    with _write_lock:
        with open(log_dir / "points_history.jsonl", "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, default=str) + "\n")

        csv_exists = csv_path.exists()
        with open(csv_path, "a", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_HEADERS, extrasaction="ignore")
            if not csv_exists:
                writer.writeheader()
            writer.writerow(row)


def audit_log(
    action: str,
    status: str,
    *,
    receipt_id: str | None = None,
    points: int | None = None,
    error: str | None = None,
    extra: dict | None = None,
):
    """Append a structured audit entry to the audit log (JSONL)."""
    log_dir = _ensure_log_dir()
    entry = {
        "timestamp": iso_now(),
        "action": action,
        "status": status,
    }
    if receipt_id:
        entry["receipt_id"] = receipt_id
    if points is not None:
        entry["points"] = points
    if error:
        entry["error"] = error
    if extra:
        entry.update(extra)

    with _write_lock:
        with open(log_dir / "audit.log", "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, default=str) + "\n")


def setup_app_logging():
    """Configure application logging to console and file."""
    log_dir = _ensure_log_dir()
    logger = logging.getLogger("receipt_processor")
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(ch)

    # File
    fh = logging.FileHandler(log_dir / "app.log", encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(fh)

    return logger
