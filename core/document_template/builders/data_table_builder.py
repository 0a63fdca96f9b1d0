import logging
from typing import Any, Dict, List

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..models import Column
from ..styling.style_config import (
    BOLD_FONT,
    CENTER_ALIGNMENT,
    DEFAULT_COLUMN_WIDTH,
    FORMAT_TEXT,
    LEFT_ALIGNMENT,
    RIGHT_ALIGNMENT,
    THIN_BORDER,
    WIDE_COLUMN_IDS,
)

logger = logging.getLogger(__name__)

SCALAR_TYPES = (str, int, float, bool, type(None))


def _cell_value(value: Any) -> Any:
    return value if isinstance(value, SCALAR_TYPES) else str(value)


class DataTableBuilder:
    """
    Writes the column header row and the data rows.

    This is a "dumb" builder: the columns it is given are written in order
    (the director passes only the visible ones), and cell values are written
    verbatim as typed, totals included, so the sheet shows exactly what the
    editor shows. Anything that is not a plain scalar is written as its text.
    """

    def __init__(
        self,
        worksheet: Worksheet,
        start_row: int,
        columns: List[Column],
        rows: List[Dict[str, Any]],
    ):
        self.worksheet = worksheet
        self.start_row = start_row
        self.columns = list(columns)
        self.rows = rows
        # Column id -> 1-based sheet column, used by the footer builder
        self.column_id_map = {col.id: idx for idx, col in enumerate(self.columns, start=1)}

    @property
    def num_columns(self) -> int:
        return len(self.columns)

    def build(self) -> int:
        """
        Returns:
            The row directly below the last data row.
        """
        ws = self.worksheet
        header_row = self.start_row

        for col_idx, col in enumerate(self.columns, start=1):
            cell = ws.cell(row=header_row, column=col_idx, value=col.label)
            cell.font = BOLD_FONT
            cell.alignment = CENTER_ALIGNMENT
            cell.border = THIN_BORDER
            width = WIDE_COLUMN_IDS.get(col.id, DEFAULT_COLUMN_WIDTH)
            ws.column_dimensions[get_column_letter(col_idx)].width = width

        data_start_row = header_row + 1
        for offset, row_data in enumerate(self.rows):
            current_row = data_start_row + offset
            for col_idx, col in enumerate(self.columns, start=1):
                value = _cell_value(row_data.get(col.id, ""))
                cell = ws.cell(row=current_row, column=col_idx, value=value)
                cell.border = THIN_BORDER
                if isinstance(value, str):
                    # Keep "0012" or "$100" from being reinterpreted by Excel
                    cell.number_format = FORMAT_TEXT
                cell.alignment = RIGHT_ALIGNMENT if col.read_only else LEFT_ALIGNMENT

        next_row = data_start_row + len(self.rows)
        logger.info(
            f"DataTableBuilder completed: {len(self.rows)} data rows x {self.num_columns} columns "
            f"(rows {data_start_row}-{next_row - 1})"
        )
        return next_row
