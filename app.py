#!/usr/bin/env python3
"""Flask web app for the Receipt Processor."""

import os

from flask import Flask, jsonify, request
from dotenv import load_dotenv

load_dotenv()  # before package imports: RECEIPT_LOG_DIR is read at import time

from receipt_processor.audit import AUDIT_DIR, audit_log, log_points_awarded, setup_app_logging
from receipt_processor.service import points_for_receipt, process_receipt
from src.storage import ReceiptNotFoundError, ReceiptStore
from src.utils import hash_payload
from src.validation import InvalidReceiptError

log = setup_app_logging()

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 1024 * 1024  # 1MB

# Lives for the whole process; receipts are lost on restart.
store = ReceiptStore()


@app.route("/health", methods=["GET"])
def health():
    """Liveness check."""
    return jsonify({"status": "ok", "receipts": len(store)})


@app.route("/receipts/process", methods=["POST"])
def api_process_receipt():
    """Validate and store a receipt; respond with its generated id."""
    data = request.get_json(force=True, silent=True)
    if data is None:
        audit_log(action="process", status="error", error="Invalid JSON input")
        log.warning("Process rejected: body is not valid JSON")
        return jsonify({"error": "Invalid JSON input"}), 400

    try:
        receipt_id = process_receipt(store, data)
    except InvalidReceiptError as e:
        audit_log(action="process", status="error", error=str(e))
        log.warning("Process rejected: %s", e)
        return jsonify({"error": "The receipt is invalid.", "details": str(e)}), 400
    except Exception as e:
        audit_log(action="process", status="error", error=str(e))
        log.exception("Process failed")
        return jsonify({"error": str(e)}), 500

    audit_log(
        action="process",
        status="success",
        receipt_id=receipt_id,
        extra={"receipt_hash": hash_payload(data), "num_items": len(data["items"])},
    )
    log.info("Receipt stored: id=%s retailer=%s items=%d", receipt_id, data["retailer"], len(data["items"]))
    return jsonify({"id": receipt_id})


@app.route("/receipts/<receipt_id>/points", methods=["GET"])
def api_receipt_points(receipt_id: str):
    """Score a stored receipt."""
    try:
        result = points_for_receipt(store, receipt_id)
    except ReceiptNotFoundError:
        audit_log(action="points", status="not_found", receipt_id=receipt_id)
        log.info("Points requested for unknown receipt id=%s", receipt_id)
        return jsonify({"error": "No receipt found for that ID."}), 404
    except Exception as e:
        audit_log(action="points", status="error", receipt_id=receipt_id, error=str(e))
        log.exception("Points failed")
        return jsonify({"error": str(e)}), 500

    receipt = result["receipt"]
    audit_log(action="points", status="success", receipt_id=receipt_id, points=result["points"])
    log_points_awarded(
        receipt_id=receipt_id,
        receipt_hash=hash_payload(receipt.to_dict()),
        retailer=receipt.retailer,
        num_items=len(receipt.items),
        points=result["points"],
        breakdown=result["breakdown"],
    )
    log.info("Points awarded: id=%s points=%d", receipt_id, result["points"])
    return jsonify({"points": result["points"]})


if __name__ == "__main__":
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8080"))
    debug = os.environ.get("FLASK_DEBUG", "").strip().lower() in ("1", "true", "yes")
    log.info("Receipt Processor starting on http://%s:%d | Logs: %s", host, port, AUDIT_DIR)
    app.run(host=host, port=port, debug=debug, threaded=True)
