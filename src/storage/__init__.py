"""Volatile receipt storage."""

from src.storage.receipt_store import (
    ReceiptNotFoundError,
    ReceiptStore,
    ReceiptStoreError,
    new_receipt_id,
)

__all__ = ["ReceiptNotFoundError", "ReceiptStore", "ReceiptStoreError", "new_receipt_id"]
