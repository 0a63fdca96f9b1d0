import logging
from typing import Any, Dict, Iterable, List, Sequence

from ..models import Column
from ..presets import (
    COL_DISCOUNT,
    COL_PACKAGES,
    COL_PRICE,
    COL_QUANTITY,
    COL_ROW_TOTAL,
    COL_UNIT_PRICE,
    COL_UNITS_PER_PACKAGE,
    PACKAGING_COLUMNS,
)
from ..utils.math_utils import format_fixed, parse_number

logger = logging.getLogger(__name__)


def visible_column_ids(columns: Iterable[Column]) -> set:
    return {col.id for col in columns if col.visible}


class RowTotalCalculator:
    """
    Derives each row's total from its cells and the column configuration.

    The formula is picked once per call from column visibility rather than
    from the document type, so custom column setups still compute:

    - packaging: packages x unitsPerPackage x unitPrice - discount, used when
      all three packaging columns are visible
    - quantity: quantity x price - discount otherwise; a hidden quantity
      counts as 1, a hidden price or discount as 0

    Totals are stored back into ``rowTotal`` as two-decimal strings.
    """

    def __init__(self, columns: Sequence[Column]):
        """
        Args:
            columns: The template's columns; only their visibility matters here.
        """
        self.visible_ids = visible_column_ids(columns)
        self.use_packaging = all(col_id in self.visible_ids for col_id in PACKAGING_COLUMNS)
        self.discount_visible = COL_DISCOUNT in self.visible_ids

    def calculate(self, rows: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Returns new rows with ``rowTotal`` recomputed; order and count are preserved.
        """
        logger.debug(
            f"Recalculating {len(rows)} row totals using "
            f"{'packaging' if self.use_packaging else 'quantity'} formula"
        )
        return [{**row, COL_ROW_TOTAL: format_fixed(self.row_total(row))} for row in rows]

    def row_total(self, row: Dict[str, Any]) -> float:
        discount = parse_number(row.get(COL_DISCOUNT)) if self.discount_visible else 0.0

        if self.use_packaging:
            packages = parse_number(row.get(COL_PACKAGES))
            units = parse_number(row.get(COL_UNITS_PER_PACKAGE))
            unit_price = parse_number(row.get(COL_UNIT_PRICE))
            return packages * units * unit_price - discount

        quantity = parse_number(row.get(COL_QUANTITY)) if COL_QUANTITY in self.visible_ids else 1.0
        price = parse_number(row.get(COL_PRICE)) if COL_PRICE in self.visible_ids else 0.0
        return quantity * price - discount


def recalc_row_totals(rows: Sequence[Dict[str, Any]], columns: Sequence[Column]) -> List[Dict[str, Any]]:
    return RowTotalCalculator(columns).calculate(rows)
