from fastapi import APIRouter, BackgroundTasks, HTTPException, status
from fastapi.responses import FileResponse
from pydantic import BaseModel
from typing import Callable, Dict, List, Optional, Union
import logging
import uuid

from api.session_store import session_store
from core.document_template.builders.document_builder import export_snapshot
from core.document_template.builders.workbook_builder import safe_sheet_title
from core.document_template.errors import NotFoundError, ReadOnlyFieldError
from core.document_template.models import DocumentSnapshot, DocumentType
from core.document_template.template_state import TemplateState
from core.system_config import sys_config
from core.utils.snitch import start_trace

router = APIRouter(prefix="/api/documents", tags=["documents"])
logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

# --- Schemas ---

class CreateRequest(BaseModel):
    document_type: Optional[DocumentType] = None

class CreateResult(BaseModel):
    session_id: str
    document: DocumentSnapshot

class DocumentTypeRequest(BaseModel):
    document_type: DocumentType

class HeaderRequest(BaseModel):
    company_name: Optional[str] = None
    company_address: Optional[str] = None
    document_title: Optional[str] = None
    customer_info: Optional[str] = None
    date: Optional[str] = None

class TextRequest(BaseModel):
    text: str

# Cells hold plain scalars; nested JSON is rejected with 422
CellValue = Union[str, int, float, bool, None]

class CellRequest(BaseModel):
    value: CellValue = None

class RowsRequest(BaseModel):
    rows: List[Dict[str, CellValue]]

class ReorderRequest(BaseModel):
    from_index: int
    to_index: Optional[int] = None  # None = drag released outside a drop target

class LabelRequest(BaseModel):
    label: str

class FooterLinePatch(BaseModel):
    label: Optional[str] = None
    value: Optional[str] = None

# --- Helpers ---

def _get_state(session_id: str) -> TemplateState:
    state = session_store.get(session_id)
    if state is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document session not found")
    return state

def _apply(session_id: str, mutation: Callable[[TemplateState], DocumentSnapshot]) -> DocumentSnapshot:
    """Runs one mutation and maps contract violations to HTTP errors."""
    state = _get_state(session_id)
    try:
        return mutation(state)
    except (NotFoundError, IndexError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ReadOnlyFieldError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

# --- Endpoints ---

@router.post("", response_model=CreateResult, status_code=status.HTTP_201_CREATED)
async def create_document(request: Optional[CreateRequest] = None):
    document_type = request.document_type if request and request.document_type else sys_config.default_document_type
    try:
        session_id = session_store.create(document_type)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return CreateResult(session_id=session_id, document=session_store.get(session_id).snapshot)

@router.get("/{session_id}", response_model=DocumentSnapshot)
async def get_document(session_id: str):
    return _get_state(session_id).snapshot

@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_document(session_id: str):
    if not session_store.discard(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document session not found")

@router.put("/{session_id}/document-type", response_model=DocumentSnapshot)
async def switch_document_type(session_id: str, request: DocumentTypeRequest):
    return _apply(session_id, lambda s: s.switch_document_type(request.document_type))

@router.put("/{session_id}/header", response_model=DocumentSnapshot)
async def update_header(session_id: str, request: HeaderRequest):
    fields = {k: v for k, v in request.model_dump(exclude_unset=True).items() if v is not None or k == "date"}
    return _apply(session_id, lambda s: s.set_header(**fields))

@router.put("/{session_id}/footer-text", response_model=DocumentSnapshot)
async def update_footer_text(session_id: str, request: TextRequest):
    return _apply(session_id, lambda s: s.set_footer_text(request.text))

# Rows

@router.post("/{session_id}/rows", response_model=DocumentSnapshot)
async def add_row(session_id: str):
    return _apply(session_id, lambda s: s.add_row())

@router.put("/{session_id}/rows", response_model=DocumentSnapshot)
async def load_rows(session_id: str, request: RowsRequest):
    return _apply(session_id, lambda s: s.load_rows(request.rows))

@router.delete("/{session_id}/rows/{index}", response_model=DocumentSnapshot)
async def remove_row(session_id: str, index: int):
    return _apply(session_id, lambda s: s.remove_row(index))

@router.put("/{session_id}/rows/{index}/cells/{column_id}", response_model=DocumentSnapshot)
async def set_cell(session_id: str, index: int, column_id: str, request: CellRequest):
    return _apply(session_id, lambda s: s.set_cell(index, column_id, request.value))

# Columns

@router.post("/{session_id}/columns/reorder", response_model=DocumentSnapshot)
async def reorder_columns(session_id: str, request: ReorderRequest):
    return _apply(session_id, lambda s: s.reorder_columns(request.from_index, request.to_index))

@router.post("/{session_id}/columns/{column_id}/toggle", response_model=DocumentSnapshot)
async def toggle_column(session_id: str, column_id: str):
    return _apply(session_id, lambda s: s.toggle_column_visibility(column_id))

@router.put("/{session_id}/columns/{column_id}/label", response_model=DocumentSnapshot)
async def rename_column(session_id: str, column_id: str, request: LabelRequest):
    return _apply(session_id, lambda s: s.rename_column(column_id, request.label))

# Footer lines

@router.post("/{session_id}/footer-lines", response_model=DocumentSnapshot)
async def add_footer_line(session_id: str):
    return _apply(session_id, lambda s: s.add_footer_line())

@router.post("/{session_id}/footer-lines/reorder", response_model=DocumentSnapshot)
async def reorder_footer_lines(session_id: str, request: ReorderRequest):
    return _apply(session_id, lambda s: s.reorder_footer_lines(request.from_index, request.to_index))

@router.patch("/{session_id}/footer-lines/{line_id}", response_model=DocumentSnapshot)
async def update_footer_line(session_id: str, line_id: str, request: FooterLinePatch):
    if request.label is None and request.value is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nothing to update: send label and/or value")
    return _apply(session_id, lambda s: s.update_footer_line(line_id, label=request.label, value=request.value))

@router.delete("/{session_id}/footer-lines/{line_id}", response_model=DocumentSnapshot)
async def remove_footer_line(session_id: str, line_id: str):
    return _apply(session_id, lambda s: s.remove_footer_line(line_id))

# Export

@router.get("/{session_id}/export")
async def export_document(session_id: str, background_tasks: BackgroundTasks):
    """
    Renders the current snapshot to .xlsx and returns it as a download.
    The file in OUTPUT_DIR is removed once the response has been sent.
    """
    snapshot = _get_state(session_id).snapshot
    start_trace(f"export-{session_id[:8]}")
    output_path = sys_config.output_dir / f"{session_id}-{uuid.uuid4().hex[:8]}.xlsx"
    summary = export_snapshot(snapshot, output_path)
    logger.info(f"Exported session {session_id}: {summary['rows_written']} rows")
    background_tasks.add_task(output_path.unlink, missing_ok=True)
    filename = f"{safe_sheet_title(snapshot.template.header.document_title)}.xlsx"
    return FileResponse(output_path, filename=filename, media_type=XLSX_MEDIA_TYPE)
