"""
PDF rendering for emailed receipts.
"""
import logging

import fitz  # PyMuPDF

from checkout_buddy.schemas.receipts import ReceiptDetails

logger = logging.getLogger(__name__)

PAGE_WIDTH = 595  # A4 in points
PAGE_HEIGHT = 842
MARGIN = 50
LINE_HEIGHT = 20
RULE = "========================"


def _money(value: float) -> str:
    return f"${value:.2f}"


def receipt_lines(details: ReceiptDetails) -> list:
    return [
        RULE,
        f"Product Name: {details.product_name}",
        f"Subtotal: {_money(details.subtotal)}",
        f"Tax (10%): {_money(details.tax)}",
        f"Total: {_money(details.total)}",
        RULE,
        f"Payment Method: {details.payment_method}",
        f"Date: {details.date}",
    ]


def render_receipt_pdf(details: ReceiptDetails) -> bytes:
    """Return a one-page PDF receipt as bytes."""
    doc = fitz.open()
    try:
        page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)

        title_box = fitz.Rect(MARGIN, MARGIN, PAGE_WIDTH - MARGIN, MARGIN + 30)
        page.insert_textbox(
            title_box,
            "Receipt",
            fontname="helv",
            fontsize=16,
            align=fitz.TEXT_ALIGN_CENTER,
        )

        y = MARGIN + 60
        for line in receipt_lines(details):
            page.insert_text((MARGIN, y), line, fontname="helv", fontsize=12)
            y += LINE_HEIGHT

        pdf_bytes = doc.tobytes()
    finally:
        doc.close()

    logger.debug(f"Rendered receipt PDF ({len(pdf_bytes)} bytes)")
    return pdf_bytes
