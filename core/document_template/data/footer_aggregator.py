import logging
from typing import Any, Dict, List, Optional, Sequence

from ..models import (
    DocumentTemplate,
    DocumentType,
    FooterLine,
    SUBTOTAL_LABEL,
    TAX_LABEL,
    TOTAL_ITEMS_LABEL,
    TOTAL_LABEL,
)
from ..presets import COL_PACKAGES, COL_ROW_TOTAL, COL_UNITS_PER_PACKAGE
from ..utils.math_utils import format_fixed, format_plain_number, parse_number
from .footer_lines import IdFactory, find_line, upsert
from .row_calculator import visible_column_ids

logger = logging.getLogger(__name__)


class FooterAggregator:
    """
    Derives the Subtotal, Total and (for packing slips) Total Items lines
    from already-recalculated rows.

    Tax is never computed: it is read from an existing "Tax" line. Lines are
    only ever updated or appended, never removed.
    """

    def __init__(
        self,
        template: DocumentTemplate,
        document_type: DocumentType,
        id_factory: Optional[IdFactory] = None,
    ):
        self.template = template
        self.document_type = document_type
        self.id_factory = id_factory
        self.visible_ids = visible_column_ids(template.columns)

    def aggregate(self, rows: Sequence[Dict[str, Any]]) -> List[FooterLine]:
        # Total must see the fresh Subtotal, so the order of upserts matters.
        lines = list(self.template.table_footer)

        sum_of_totals = sum(parse_number(row.get(COL_ROW_TOTAL)) for row in rows)
        lines = upsert(lines, SUBTOTAL_LABEL, format_fixed(sum_of_totals), self.id_factory)

        tax_line = find_line(lines, TAX_LABEL)
        tax_val = parse_number(tax_line.value) if tax_line else 0.0

        lines = upsert(lines, TOTAL_LABEL, format_fixed(sum_of_totals + tax_val), self.id_factory)

        if self.document_type is DocumentType.PACKING_SLIP:
            lines = upsert(lines, TOTAL_ITEMS_LABEL, format_plain_number(self.total_items(rows)), self.id_factory)

        logger.debug(f"Footer recalculated: subtotal={sum_of_totals:.2f}, tax={tax_val:.2f}")
        return lines

    def total_items(self, rows: Sequence[Dict[str, Any]]) -> float:
        if COL_PACKAGES not in self.visible_ids or COL_UNITS_PER_PACKAGE not in self.visible_ids:
            return 0.0
        return sum(
            parse_number(row.get(COL_PACKAGES)) * parse_number(row.get(COL_UNITS_PER_PACKAGE))
            for row in rows
        )


def recalc_footer(
    rows: Sequence[Dict[str, Any]],
    template: DocumentTemplate,
    document_type: DocumentType,
    id_factory: Optional[IdFactory] = None,
) -> List[FooterLine]:
    return FooterAggregator(template, document_type, id_factory).aggregate(rows)
