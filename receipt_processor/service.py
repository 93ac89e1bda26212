"""Service layer between the HTTP routes and the core store/engine."""

from src.models import Receipt
from src.scoring import score_breakdown
from src.storage import ReceiptStore
from src.validation import validate_receipt


def process_receipt(store: ReceiptStore, payload: dict) -> str:
    """
    Validate a decoded JSON payload, store it as a Receipt and return its new id.
    Raises InvalidReceiptError if the payload does not satisfy the receipt schema.
    """
    validate_receipt(payload)
    receipt = Receipt.from_dict(payload)
    return store.put(receipt)


def points_for_receipt(store: ReceiptStore, receipt_id: str) -> dict:
    """
    Look up a stored receipt and score it.
    Raises ReceiptNotFoundError if the id is unknown.
    Returns dict with receipt, points and the per-rule breakdown.
    """
    receipt = store.get(receipt_id)
    breakdown = score_breakdown(receipt)
    return {
        "receipt_id": receipt_id,
        "receipt": receipt,
        "points": sum(breakdown.values()),
        "breakdown": breakdown,
    }
