"""Component tests for the PDF receipt writer."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from restaurant_pos.adapters.pdf_receipt import PdfReceiptWriter
from restaurant_pos.models.catalog_models import Customer, FoodItem
from restaurant_pos.models.order_models import Order


@pytest.mark.component
class TestPdfReceiptWriter:
    """Test suite for PdfReceiptWriter."""

    @pytest.fixture
    def writer(self, tmp_path: Path) -> PdfReceiptWriter:
        """Create a writer targeting a temporary directory."""
        return PdfReceiptWriter(output_dir=tmp_path / "receipts")

    @pytest.fixture
    def order(
        self,
        burger: FoodItem,
        cola: FoodItem,
        customer: Customer,
        now: datetime,
        order_factory: Callable[..., Order],
    ) -> Order:
        """Create a discounted two line order."""
        return order_factory(customer, [(burger, 2), (cola, 1)], now, discount=10)

    def test_writes_pdf(self, writer: PdfReceiptWriter, order: Order) -> None:
        """Test that a PDF document is produced."""
        location = writer.write_receipt(order)

        assert location == str(writer.receipt_path(order))
        assert Path(location).read_bytes().startswith(b"%PDF")

    def test_receipt_file_named_after_short_id(
        self, writer: PdfReceiptWriter, order: Order
    ) -> None:
        """Test the receipt file name."""
        assert writer.receipt_path(order).name == f"receipt-{order.short_id}.pdf"

    def test_markup_in_names_is_escaped(
        self,
        writer: PdfReceiptWriter,
        burger: FoodItem,
        customer: Customer,
        now: datetime,
        order_factory: Callable[..., Order],
    ) -> None:
        """Test that reportlab markup characters do not break rendering."""
        odd = customer.model_copy(update={"name": "Fish & Chips <Ltd>"})
        order = order_factory(odd, [(burger, 1)], now)

        assert writer.write_receipt(order) is not None

    def test_story_contains_totals(self, writer: PdfReceiptWriter, order: Order) -> None:
        """Test the rendered text lines."""
        texts = [
            flowable.getPlainText()
            for flowable in writer._build_story(order)
            if hasattr(flowable, "getPlainText")
        ]

        assert "Subtotal: Rs. 1,900.00" in texts
        assert "Discount (10%): -Rs. 190.00" in texts
        assert "TOTAL: Rs. 1,710.00" in texts
        assert "Thank you for your business!" in texts

    def test_no_discount_line_without_discount(
        self,
        writer: PdfReceiptWriter,
        burger: FoodItem,
        customer: Customer,
        now: datetime,
        order_factory: Callable[..., Order],
    ) -> None:
        """Test that undiscounted receipts omit the discount line."""
        order = order_factory(customer, [(burger, 1)], now)
        texts = [
            flowable.getPlainText()
            for flowable in writer._build_story(order)
            if hasattr(flowable, "getPlainText")
        ]

        assert not any(text.startswith("Discount") for text in texts)

    def test_failure_returns_none(self, writer: PdfReceiptWriter, order: Order) -> None:
        """Test that rendering failures are reported, not raised."""
        with patch(
            "restaurant_pos.adapters.pdf_receipt.SimpleDocTemplate",
            side_effect=OSError("read-only file system"),
        ):
            assert writer.write_receipt(order) is None
