# document_template/builders/workbook_builder.py
import logging
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

logger = logging.getLogger(__name__)

MAX_SHEET_TITLE = 31
_INVALID_TITLE_CHARS = set('[]:*?/\\')


def safe_sheet_title(title: str, fallback: str = "Document") -> str:
    """Excel sheet titles are limited to 31 characters and cannot contain []:*?/\\."""
    cleaned = "".join(ch for ch in (title or "") if ch not in _INVALID_TITLE_CHARS).strip()
    return cleaned[:MAX_SHEET_TITLE] or fallback


class WorkbookBuilder:
    """
    Builder responsible for creating a clean single-sheet workbook for a document.
    """

    def __init__(self, sheet_title: str):
        self.sheet_title = safe_sheet_title(sheet_title)
        self.workbook = None

    def build(self) -> Workbook:
        """
        Creates a new workbook whose only sheet carries the document title.

        Returns:
            A new Workbook instance with one empty sheet
        """
        self.workbook = Workbook()
        self.workbook.active.title = self.sheet_title
        logger.debug(f"Created workbook with sheet '{self.sheet_title}'")
        return self.workbook

    def get_worksheet(self) -> Worksheet:
        if self.workbook is None:
            raise RuntimeError("Workbook not created yet. Call build() first.")
        return self.workbook[self.sheet_title]
