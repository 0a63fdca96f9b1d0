import logging
from openpyxl.worksheet.worksheet import Worksheet

from ..models import DocumentHeader
from ..styling.style_config import COMPANY_FONT, TITLE_FONT
from ..utils.text import write_date_cell

logger = logging.getLogger(__name__)


class HeaderBuilder:
    """Writes the company/customer block above the table."""

    def __init__(self, worksheet: Worksheet, start_row: int, header: DocumentHeader):
        self.worksheet = worksheet
        self.start_row = start_row
        self.header = header

    def build(self) -> int:
        """
        Returns:
            The first free row after the header block (one blank spacer row included).
        """
        ws = self.worksheet
        row = self.start_row

        ws.cell(row=row, column=1, value=self.header.company_name).font = COMPANY_FONT
        row += 1
        ws.cell(row=row, column=1, value=self.header.company_address)
        row += 2

        ws.cell(row=row, column=1, value=self.header.document_title).font = TITLE_FONT
        row += 1
        ws.cell(row=row, column=1, value=f"Customer: {self.header.customer_info}")
        row += 1

        if self.header.date:
            ws.cell(row=row, column=1, value="Date:")
            write_date_cell(ws.cell(row=row, column=2), self.header.date)
            row += 1

        logger.debug(f"Header written to rows {self.start_row}-{row - 1}")
        return row + 1
