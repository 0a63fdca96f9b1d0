# document_template/builders/__init__.py
from .workbook_builder import WorkbookBuilder
from .header_builder import HeaderBuilder
from .data_table_builder import DataTableBuilder
from .footer_builder import FooterBuilder
from .document_builder import DocumentBuilder, export_snapshot

__all__ = [
    'WorkbookBuilder',
    'HeaderBuilder',
    'DataTableBuilder',
    'FooterBuilder',
    'DocumentBuilder',
    'export_snapshot',
]
