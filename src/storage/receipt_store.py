"""In-memory receipt storage keyed by generated identifiers. Volatile: lost on restart."""

import logging
import threading
import uuid
from typing import Callable

from src.models import Receipt

log = logging.getLogger("receipt_processor.storage")

MAX_ID_ATTEMPTS = 5


class ReceiptStoreError(RuntimeError):
    """Raised when the store cannot allocate a fresh identifier."""


class ReceiptNotFoundError(LookupError):
    """Raised when no receipt is stored under the requested identifier."""

    def __init__(self, receipt_id: str):
        super().__init__(f"No receipt found for id={receipt_id}")
        self.receipt_id = receipt_id


def new_receipt_id() -> str:
    """Random 128-bit identifier (UUID4) as a string."""
    return str(uuid.uuid4())


class ReceiptStore:
    """
    Append-only, thread-safe mapping of identifier -> Receipt.
    Every read and write of the mapping happens under one lock; stored receipts
    are immutable, so a reader never sees a partially written entry.
    """

    def __init__(self, id_factory: Callable[[], str] = new_receipt_id):
        self._id_factory = id_factory
        self._lock = threading.Lock()
        self._receipts: dict[str, Receipt] = {}

    def put(self, receipt: Receipt) -> str:
        """Store a receipt under a newly generated identifier and return it."""
        with self._lock:
            for _ in range(MAX_ID_ATTEMPTS):
                receipt_id = self._id_factory()
                if receipt_id not in self._receipts:
                    self._receipts[receipt_id] = receipt
                    return receipt_id
                log.warning("Generated receipt id collided with an existing entry: %s", receipt_id)
        raise ReceiptStoreError(f"Could not allocate a unique receipt id after {MAX_ID_ATTEMPTS} attempts")

    def get(self, receipt_id: str) -> Receipt:
        """Return the stored receipt. Raises ReceiptNotFoundError if the id is unknown."""
        with self._lock:
            receipt = self._receipts.get(receipt_id)
        if receipt is None:
            raise ReceiptNotFoundError(receipt_id)
        return receipt

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock:
            return receipt_id in self._receipts

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
