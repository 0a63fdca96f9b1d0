import logging
from typing import List

from openpyxl.worksheet.worksheet import Worksheet

from ..models import DocumentFooter, FooterLine
from ..styling.style_config import BOLD_FONT, FORMAT_TEXT, RIGHT_ALIGNMENT, WRAP_TOP_ALIGNMENT

logger = logging.getLogger(__name__)


class FooterBuilder:
    """
    Writes the summary lines under the table and the trailer text below them.

    Summary lines are placed in the two right-most table columns (label, value)
    in their stored order; values of computed lines are bold. The trailer is
    written verbatim; any markup it carries is not interpreted.
    """

    def __init__(
        self,
        worksheet: Worksheet,
        start_row: int,
        num_columns: int,
        lines: List[FooterLine],
        footer: DocumentFooter,
    ):
        self.worksheet = worksheet
        self.start_row = start_row
        self.num_columns = max(num_columns, 2)
        self.lines = lines
        self.footer = footer

    @property
    def label_column(self) -> int:
        return self.num_columns - 1

    @property
    def value_column(self) -> int:
        return self.num_columns

    def build(self) -> int:
        ws = self.worksheet
        row = self.start_row + 1

        for line in self.lines:
            label_cell = ws.cell(row=row, column=self.label_column, value=f"{line.label}:")
            label_cell.font = BOLD_FONT
            label_cell.alignment = RIGHT_ALIGNMENT
            value_cell = ws.cell(row=row, column=self.value_column, value=line.value)
            value_cell.number_format = FORMAT_TEXT
            value_cell.alignment = RIGHT_ALIGNMENT
            if line.is_computed:
                value_cell.font = BOLD_FONT
            row += 1

        row += 1
        if self.footer.text:
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=self.num_columns)
            trailer = ws.cell(row=row, column=1, value=self.footer.text)
            trailer.alignment = WRAP_TOP_ALIGNMENT
            row += 1

        logger.debug(f"Footer written: {len(self.lines)} summary lines, trailer={'yes' if self.footer.text else 'no'}")
        return row
