"""
Named document presets.

Selecting a preset replaces columns, footer lines, header and trailer text
wholesale; nothing from the previous document type survives.
"""

import logging
from typing import Any, Dict, List

from .errors import UnknownDocumentTypeError
from .models import (
    Column,
    DocumentFooter,
    DocumentHeader,
    DocumentTemplate,
    DocumentType,
    FooterLine,
    SUBTOTAL_LABEL,
    TAX_LABEL,
    TOTAL_ITEMS_LABEL,
    TOTAL_LABEL,
)

logger = logging.getLogger(__name__)

# --- Column ids ---
COL_PRODUCT = "product"
COL_DESCRIPTION = "description"
COL_QUANTITY = "quantity"
COL_PRICE = "price"
COL_PACKAGES = "packages"
COL_UNITS_PER_PACKAGE = "unitsPerPackage"
COL_UNIT_PRICE = "unitPrice"
COL_ROW_TOTAL = "rowTotal"
COL_DISCOUNT = "discount"

PACKAGING_COLUMNS = (COL_PACKAGES, COL_UNITS_PER_PACKAGE, COL_UNIT_PRICE)

DEFAULT_COLUMNS: List[Column] = [
    Column(id=COL_PRODUCT, label="Product"),
    Column(id=COL_DESCRIPTION, label="Description"),
    Column(id=COL_QUANTITY, label="Quantity"),
    Column(id=COL_PRICE, label="Price"),
    Column(id=COL_PACKAGES, label="Packages", visible=False),
    Column(id=COL_UNITS_PER_PACKAGE, label="Units/Package", visible=False),
    Column(id=COL_UNIT_PRICE, label="Unit Price", visible=False),
    Column(id=COL_ROW_TOTAL, label="Total", read_only=True),
    Column(id=COL_DISCOUNT, label="Discount", visible=False),
]

DEFAULT_FOOTER_LINES: List[FooterLine] = [
    FooterLine(id="tax-line", label=TAX_LABEL, value="10.00"),
    FooterLine(id="subtotal-line", label=SUBTOTAL_LABEL, value="300.00"),
    FooterLine(id="total-line", label=TOTAL_LABEL, value="310.00"),
]

BLANK_ROW: Dict[str, Any] = {
    COL_PRODUCT: "",
    COL_DESCRIPTION: "",
    COL_QUANTITY: 1,
    COL_PRICE: "0",
    COL_PACKAGES: 0,
    COL_UNITS_PER_PACKAGE: 0,
    COL_UNIT_PRICE: 0,
    COL_DISCOUNT: 0,
    COL_ROW_TOTAL: "0.00",
}


def blank_row() -> Dict[str, Any]:
    return dict(BLANK_ROW)


def _with_visibility(show: tuple, hide: tuple) -> List[Column]:
    columns = []
    for col in DEFAULT_COLUMNS:
        if col.id in show:
            col = col.model_copy(update={"visible": True})
        elif col.id in hide:
            col = col.model_copy(update={"visible": False})
        columns.append(col)
    return columns


def _invoice_preset() -> DocumentTemplate:
    return DocumentTemplate(
        header=DocumentHeader(
            company_name="My Company Ltd.",
            company_address="123 Main St, City, Country",
            document_title="Invoice #0001",
            customer_info="John Doe, 456 Another St",
        ),
        columns=_with_visibility(show=(), hide=PACKAGING_COLUMNS),
        table_footer=list(DEFAULT_FOOTER_LINES),
        footer=DocumentFooter(text="Thank you for your business!"),
    )


def _packing_slip_preset() -> DocumentTemplate:
    return DocumentTemplate(
        header=DocumentHeader(
            company_name="My Company Ltd.",
            company_address="123 Main St, City, Country",
            document_title="Packing Slip #2001",
            customer_info="Warehouse A, City",
        ),
        columns=_with_visibility(show=PACKAGING_COLUMNS, hide=(COL_QUANTITY, COL_PRICE)),
        table_footer=list(DEFAULT_FOOTER_LINES) + [
            FooterLine(id="total-items", label=TOTAL_ITEMS_LABEL, value="0"),
        ],
        footer=DocumentFooter(text="Handle with care"),
    )


_PRESET_FACTORIES = {
    DocumentType.INVOICE: _invoice_preset,
    DocumentType.PACKING_SLIP: _packing_slip_preset,
}


def resolve_document_type(document_type: Any) -> DocumentType:
    """Accepts a DocumentType or its string value."""
    try:
        return DocumentType(document_type)
    except ValueError:
        logger.warning(f"Unknown document type requested: {document_type!r}")
        raise UnknownDocumentTypeError(
            f"Unknown document type '{document_type}'. "
            f"Expected one of: {', '.join(t.value for t in DocumentType)}"
        ) from None


def get_preset(document_type: Any) -> DocumentTemplate:
    """Returns a fresh template for the named document type."""
    return _PRESET_FACTORIES[resolve_document_type(document_type)]()
