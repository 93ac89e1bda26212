"""Receipt Processor - accepts receipts and awards reward points."""

from receipt_processor.service import points_for_receipt, process_receipt

__all__ = ["points_for_receipt", "process_receipt"]
