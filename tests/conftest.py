"""Pytest configuration: keep audit and app logs out of the repo during tests."""

import os
import tempfile

# Must be set before receipt_processor.audit is imported.
os.environ.setdefault("RECEIPT_LOG_DIR", tempfile.mkdtemp(prefix="receipt-processor-logs-"))
