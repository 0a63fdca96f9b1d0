import logging
import time
import traceback
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)


class ExportSession:
    """
    Context manager to track one document export.
    Records status, duration and the error of a failed export; exceptions
    are always propagated.
    """
    def __init__(self, output_path: Path, document_title: str = ""):
        self.output_path = Path(output_path)
        self.document_title = document_title

        self.start_time = None
        self.duration = None
        self.rows_written = 0
        self.footer_lines_written = 0

        self.status = "pending"
        self.error_message = None
        self.error_traceback = None

    def __enter__(self):
        self.start_time = time.time()
        logger.info(f"=== Export Started: '{self.document_title}' -> {self.output_path} ===")
        return self

    def record(self, rows_written: int, footer_lines_written: int):
        self.rows_written = rows_written
        self.footer_lines_written = footer_lines_written

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.time() - self.start_time

        if exc_type:
            self.status = "error"
            self.error_message = str(exc_val)
            self.error_traceback = "".join(traceback.format_exception(exc_type, exc_val, exc_tb))
            logger.error(f"Export failed: {self.error_message}")
        else:
            self.status = "success"

        logger.info(f"=== Export Ended ({self.status}) | Duration: {self.duration:.2f}s ===")

        # Propagate exceptions
        return False

    def get_summary(self) -> Dict:
        return {
            "status": self.status,
            "output_path": str(self.output_path),
            "rows_written": self.rows_written,
            "footer_lines_written": self.footer_lines_written,
            "error_message": self.error_message,
        }
