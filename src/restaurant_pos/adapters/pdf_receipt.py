"""PDF receipt writer built on reportlab."""

import logging
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from restaurant_pos.adapters.base_receipt import ReceiptWriter
from restaurant_pos.models.money import format_currency
from restaurant_pos.models.order_models import Order

logger = logging.getLogger(__name__)


class PdfReceiptWriter(ReceiptWriter):
    """Writes one A4 PDF receipt per order into an output directory."""

    MARGIN = 20 * mm

    def __init__(self, output_dir: str | Path, shop_name: str = "MOS BURGERS") -> None:
        """Initialize the writer.

        Args:
            output_dir: Directory receipts are written to (created if missing)
            shop_name: Name printed in the receipt header
        """
        self.output_dir = Path(output_dir)
        self.shop_name = shop_name
        self.styles = getSampleStyleSheet()
        self.shop_name_style = ParagraphStyle(
            "ShopName",
            parent=self.styles["Heading1"],
            fontSize=20,
            spaceAfter=4,
            fontName="Helvetica-Bold",
        )
        self.body_style = ParagraphStyle(
            "ReceiptBody", parent=self.styles["Normal"], fontSize=11, spaceAfter=4
        )
        self.total_style = ParagraphStyle(
            "ReceiptTotal",
            parent=self.styles["Normal"],
            fontSize=14,
            alignment=2,  # Right
            fontName="Helvetica-Bold",
        )
        self.footer_style = ParagraphStyle(
            "ReceiptFooter", parent=self.styles["Normal"], fontSize=10
        )

    def receipt_path(self, order: Order) -> Path:
        """File the receipt for ``order`` is written to."""
        return self.output_dir / f"receipt-{order.short_id}.pdf"

    def write_receipt(self, order: Order) -> str | None:
        """Render the receipt PDF for an order.

        Args:
            order: Finalized order

        Returns:
            str: Path of the PDF, or None if rendering or writing failed
        """
        path = self.receipt_path(order)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            doc = SimpleDocTemplate(
                str(path),
                pagesize=A4,
                leftMargin=self.MARGIN,
                rightMargin=self.MARGIN,
                topMargin=self.MARGIN,
                bottomMargin=self.MARGIN,
                title=f"Receipt #{order.short_id}",
            )
            doc.build(self._build_story(order))
            logger.info(f"Receipt for order {order.id} written to {path}")
            return str(path)

        except Exception as e:
            logger.error(f"Failed to write receipt for order {order.id}: {e}")
            return None

    def _build_story(self, order: Order) -> list:
        story: list = [
            Paragraph(escape(self.shop_name), self.shop_name_style),
            Paragraph("Receipt", self.body_style),
            Spacer(1, 4 * mm),
            Paragraph(f"Order ID: #{order.short_id}", self.body_style),
            Paragraph(f"Date: {order.created_at:%Y-%m-%d %H:%M}", self.body_style),
            Paragraph(f"Customer: {escape(order.customer.name)}", self.body_style),
            Paragraph(f"Contact: {escape(order.customer.contact_number)}", self.body_style),
            Spacer(1, 6 * mm),
            self._build_items_table(order),
            Spacer(1, 6 * mm),
        ]

        story.append(Paragraph(f"Subtotal: {format_currency(order.subtotal)}", self.body_style))
        if order.discount_percentage > 0:
            story.append(
                Paragraph(
                    f"Discount ({order.discount_percentage.normalize():f}%): "
                    f"-{format_currency(order.discount_amount)}",
                    self.body_style,
                )
            )
        story.append(Paragraph(f"TOTAL: {format_currency(order.total)}", self.total_style))

        story.extend(
            [
                Spacer(1, 15 * mm),
                Paragraph("Thank you for your business!", self.footer_style),
                Paragraph("Visit us again!", self.footer_style),
            ]
        )
        return story

    def _build_items_table(self, order: Order) -> Table:
        rows = [["Item", "Qty", "Price", "Total"]]
        for line in order.items:
            rows.append(
                [
                    line.food_item.name,
                    str(line.quantity),
                    format_currency(line.food_item.price),
                    format_currency(line.subtotal),
                ]
            )

        table = Table(rows, colWidths=[80 * mm, 20 * mm, 35 * mm, 35 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("LINEBELOW", (0, 0), (-1, 0), 1, colors.black),
                    ("LINEBELOW", (0, -1), (-1, -1), 1, colors.black),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                ]
            )
        )
        return table
