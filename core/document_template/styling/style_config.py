"""
Centralized definition of reusable style objects for the document export.
"""

from openpyxl.styles import Alignment, Border, Side, Font

# --- Border Styles ---
THIN_SIDE = Side(border_style="thin", color="000000")
THIN_BORDER = Border(left=THIN_SIDE, right=THIN_SIDE, top=THIN_SIDE, bottom=THIN_SIDE)

# --- Alignment Styles ---
CENTER_ALIGNMENT = Alignment(horizontal='center', vertical='center', wrap_text=True)
LEFT_ALIGNMENT = Alignment(horizontal='left', vertical='center', wrap_text=True)
RIGHT_ALIGNMENT = Alignment(horizontal='right', vertical='center')
WRAP_TOP_ALIGNMENT = Alignment(horizontal='left', vertical='top', wrap_text=True)

# --- Font Styles ---
BOLD_FONT = Font(bold=True)
COMPANY_FONT = Font(bold=True, size=14)
TITLE_FONT = Font(bold=True, size=12)

# --- Constants for Number Formats ---
FORMAT_TEXT = '@'
FORMAT_DATE = 'dd/mm/yyyy'

# --- Layout ---
DEFAULT_COLUMN_WIDTH = 16
WIDE_COLUMN_IDS = {'description': 32, 'product': 22}
