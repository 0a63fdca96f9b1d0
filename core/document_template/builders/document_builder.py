import logging
from pathlib import Path
from typing import Dict, Union

from openpyxl import Workbook

from core.utils.snitch import snitch

from ..models import DocumentSnapshot
from ..utils.generation_session import ExportSession
from .data_table_builder import DataTableBuilder
from .footer_builder import FooterBuilder
from .header_builder import HeaderBuilder
from .workbook_builder import WorkbookBuilder

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """
    The Director in the Builder pattern.
    Coordinates the header, table and footer builders to render one snapshot
    into a workbook. The snapshot is consumed as-is; no totals are recomputed
    here.
    """

    def __init__(self, snapshot: DocumentSnapshot):
        self.snapshot = snapshot
        self.template = snapshot.template

        # Filled in by build()
        self.data_start_row = -1
        self.next_row_after_footer = -1

    def build(self) -> Workbook:
        workbook_builder = WorkbookBuilder(self.template.header.document_title)
        workbook = workbook_builder.build()
        worksheet = workbook_builder.get_worksheet()

        next_row = HeaderBuilder(worksheet, 1, self.template.header).build()

        self.data_start_row = next_row + 1
        table = DataTableBuilder(worksheet, next_row, self.template.visible_columns, self.snapshot.rows)
        next_row = table.build()

        footer = FooterBuilder(
            worksheet,
            next_row,
            table.num_columns,
            self.template.table_footer,
            self.template.footer,
        )
        self.next_row_after_footer = footer.build()

        logger.debug(f"Document '{worksheet.title}' built, last row {self.next_row_after_footer - 1}")
        return workbook


@snitch
def export_snapshot(snapshot: DocumentSnapshot, output_path: Union[str, Path]) -> Dict:
    """
    Renders a snapshot and saves it as an .xlsx file.

    Returns:
        The export session summary (status, path, counts).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with ExportSession(output_path, snapshot.template.header.document_title) as session:
        workbook = DocumentBuilder(snapshot).build()
        try:
            workbook.save(output_path)
        finally:
            workbook.close()
        session.record(len(snapshot.rows), len(snapshot.template.table_footer))

    return session.get_summary()
