"""Main application entry point for the POS engine.

This module provides the factory that wires the engine from environment
configuration: logging, observability, the persistence and receipt
collaborators, and the POS service itself.
"""

import logging
import os
from datetime import UTC, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from restaurant_pos.adapters.base_receipt import ReceiptWriter
from restaurant_pos.adapters.json_file_persistence import JsonFileSnapshotStore
from restaurant_pos.adapters.pdf_receipt import PdfReceiptWriter
from restaurant_pos.observability import configure_logging, setup_observability
from restaurant_pos.repositories.catalog_repository import DEFAULT_LOW_STOCK_THRESHOLD
from restaurant_pos.services.pos_service import PosService

logger = logging.getLogger(__name__)


def get_snapshot_store() -> JsonFileSnapshotStore:
    """Create the snapshot store from environment configuration.

    Returns:
        JSON file snapshot store at POS_DATA_FILE (default: pos-data.json)
    """
    data_file = os.getenv("POS_DATA_FILE", "pos-data.json")
    logger.info(f"Using snapshot file {data_file}")
    return JsonFileSnapshotStore(data_file)


def create_receipt_writer() -> ReceiptWriter | None:
    """Create the receipt writer from environment configuration.

    Returns:
        PDF receipt writer, or None when ENABLE_RECEIPTS is false
    """
    if os.getenv("ENABLE_RECEIPTS", "true").lower() != "true":
        logger.warning("Receipts disabled - checkouts will not produce receipt documents")
        return None

    receipt_dir = os.getenv("POS_RECEIPT_DIR", "receipts")
    shop_name = os.getenv("POS_SHOP_NAME", "MOS BURGERS")
    logger.info(f"Receipts will be written to {receipt_dir}")
    return PdfReceiptWriter(output_dir=receipt_dir, shop_name=shop_name)


def get_low_stock_threshold() -> int:
    """Read LOW_STOCK_THRESHOLD.

    Raises:
        ValueError: If the value is not a non-negative integer
    """
    raw = os.getenv("LOW_STOCK_THRESHOLD", str(DEFAULT_LOW_STOCK_THRESHOLD))
    try:
        threshold = int(raw)
    except ValueError as e:
        raise ValueError(f"LOW_STOCK_THRESHOLD must be an integer, got {raw!r}") from e
    if threshold < 0:
        raise ValueError(f"LOW_STOCK_THRESHOLD must be non-negative, got {threshold}")
    return threshold


def get_report_timezone() -> tzinfo:
    """Read REPORT_TIMEZONE (default UTC).

    Raises:
        ValueError: If the zone name is unknown
    """
    name = os.getenv("REPORT_TIMEZONE", "UTC")
    if name.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown REPORT_TIMEZONE {name!r}") from e


def create_application() -> PosService:
    """Create and configure the POS service with all dependencies.

    This factory function:
    1. Configures logging
    2. Sets up observability
    3. Creates the persistence and receipt collaborators
    4. Restores saved state (or seeds sample data)
    5. Creates the POS service

    Returns:
        Configured PosService instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    setup_observability(
        enable_exporters=os.getenv("OTEL_EXPORTERS_ENABLED", "true").lower() == "true"
    )

    logger.info("Initializing POS engine...")

    service = PosService.from_persistence(
        persistence=get_snapshot_store(),
        receipt_writer=create_receipt_writer(),
        low_stock_threshold=get_low_stock_threshold(),
        report_timezone=get_report_timezone(),
    )

    logger.info("POS engine initialized successfully")
    return service
