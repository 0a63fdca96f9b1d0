import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from .data.footer_aggregator import recalc_footer
from .data.footer_lines import IdFactory, find_line, make_footer_line, new_line_id
from .data.row_calculator import recalc_row_totals
from .errors import NotFoundError, ReadOnlyFieldError
from .models import Column, DocumentHeader, DocumentSnapshot, DocumentTemplate, DocumentType, FooterLine
from .presets import COL_ROW_TOTAL, blank_row, get_preset, resolve_document_type
from .utils.ordering import reorder

logger = logging.getLogger(__name__)

NEW_LINE_LABEL = "New Line"
NEW_LINE_VALUE = "0.00"

SnapshotListener = Callable[[DocumentSnapshot], None]


class TemplateState:
    """
    Aggregate root of the document editor: header, columns, rows, footer lines
    and trailer text.

    Every data-affecting mutation runs a full recalculation pass (row totals,
    then footer lines) over the whole row set and commits rows and footer
    together as one new snapshot. Observers registered with ``subscribe`` are
    notified after the commit, so they never see rows and footer out of step.
    A mutation that raises leaves the committed snapshot untouched.
    """

    def __init__(
        self,
        document_type: Any = DocumentType.INVOICE,
        id_factory: Optional[IdFactory] = None,
    ):
        self._id_factory = id_factory or new_line_id
        self._listeners: List[SnapshotListener] = []
        self._snapshot: Optional[DocumentSnapshot] = None
        self.switch_document_type(document_type)

    # ========== Read access ==========

    @property
    def snapshot(self) -> DocumentSnapshot:
        """Deep copy of the committed state, safe to hand to a renderer."""
        return self._snapshot.model_copy(deep=True)

    @property
    def document_type(self) -> DocumentType:
        return self._snapshot.document_type

    @property
    def template(self) -> DocumentTemplate:
        """Deep copy of the committed template; edit it through the mutation methods."""
        return self._snapshot.template.model_copy(deep=True)

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return [dict(row) for row in self._snapshot.rows]

    @property
    def footer_lines(self) -> List[FooterLine]:
        return list(self._snapshot.template.table_footer)

    def find_footer_line(self, label: str) -> Optional[FooterLine]:
        return find_line(self._snapshot.template.table_footer, label)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Registers a callback for committed snapshots; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ========== Document type ==========

    def switch_document_type(self, document_type: Any) -> DocumentSnapshot:
        """Hard reset to the named preset with a single blank row."""
        doc_type = resolve_document_type(document_type)
        logger.info(f"Switching document type to '{doc_type.value}'")
        return self._recalculate(get_preset(doc_type), [blank_row()], doc_type)

    # ========== Rows ==========

    def add_row(self) -> DocumentSnapshot:
        return self._recalculate(self._snapshot.template, self.rows + [blank_row()])

    def remove_row(self, index: int) -> DocumentSnapshot:
        rows = self.rows
        self._check_row_index(index, rows)
        del rows[index]
        return self._recalculate(self._snapshot.template, rows)

    def set_cell(self, index: int, column_id: str, raw_value: Any) -> DocumentSnapshot:
        rows = self.rows
        self._check_row_index(index, rows)
        column = self._get_column(column_id)
        if column.read_only or column_id == COL_ROW_TOTAL:
            logger.warning(f"Rejected edit of read-only column '{column_id}'")
            raise ReadOnlyFieldError(f"Column '{column_id}' is computed and cannot be edited")
        rows[index][column_id] = raw_value
        return self._recalculate(self._snapshot.template, rows)

    def load_rows(self, rows: Iterable[Dict[str, Any]]) -> DocumentSnapshot:
        """Replaces the whole row set in one commit; supplied row totals are recomputed."""
        loaded = []
        for row in rows:
            merged = blank_row()
            merged.update({key: value for key, value in row.items() if key != COL_ROW_TOTAL})
            loaded.append(merged)
        return self._recalculate(self._snapshot.template, loaded)

    # ========== Columns ==========

    def reorder_columns(self, from_index: int, to_index: Optional[int]) -> DocumentSnapshot:
        columns = reorder(self._snapshot.template.columns, from_index, to_index)
        return self._commit(self._snapshot.template.model_copy(update={"columns": columns}), self._snapshot.rows)

    def toggle_column_visibility(self, column_id: str) -> DocumentSnapshot:
        """
        Flips one column's visibility and recalculates, since the row formula
        depends on which columns are visible.
        """
        target = self._get_column(column_id)
        columns = [
            col.model_copy(update={"visible": not col.visible}) if col.id == target.id else col
            for col in self._snapshot.template.columns
        ]
        logger.debug(f"Column '{column_id}' visible={not target.visible}")
        return self._recalculate(self._snapshot.template.model_copy(update={"columns": columns}), self.rows)

    def rename_column(self, column_id: str, label: str) -> DocumentSnapshot:
        self._get_column(column_id)
        columns = [
            col.model_copy(update={"label": label}) if col.id == column_id else col
            for col in self._snapshot.template.columns
        ]
        return self._commit(self._snapshot.template.model_copy(update={"columns": columns}), self._snapshot.rows)

    # ========== Footer lines ==========

    def add_footer_line(self) -> DocumentSnapshot:
        line = make_footer_line(NEW_LINE_LABEL, NEW_LINE_VALUE, self._id_factory)
        return self._commit_footer(self.footer_lines + [line])

    def remove_footer_line(self, line_id: str) -> DocumentSnapshot:
        self._get_footer_line(line_id)
        return self._commit_footer([line for line in self.footer_lines if line.id != line_id])

    def set_footer_line_label(self, line_id: str, text: str) -> DocumentSnapshot:
        return self._update_footer_line(line_id, label=text)

    def set_footer_line_value(self, line_id: str, text: str) -> DocumentSnapshot:
        return self._update_footer_line(line_id, value=text)

    def update_footer_line(
        self, line_id: str, label: Optional[str] = None, value: Optional[str] = None
    ) -> DocumentSnapshot:
        """Edits label and/or value of one line in a single commit."""
        changes = {key: text for key, text in (("label", label), ("value", value)) if text is not None}
        return self._update_footer_line(line_id, **changes)

    def reorder_footer_lines(self, from_index: int, to_index: Optional[int]) -> DocumentSnapshot:
        return self._commit_footer(reorder(self.footer_lines, from_index, to_index))

    # ========== Free text ==========

    def set_header(self, **fields: Any) -> DocumentSnapshot:
        unknown = set(fields) - set(DocumentHeader.model_fields)
        if unknown:
            raise ValueError(f"Unknown header fields: {sorted(unknown)}")
        header = self._snapshot.template.header.model_copy(update=fields)
        return self._commit(self._snapshot.template.model_copy(update={"header": header}), self._snapshot.rows)

    def set_footer_text(self, text: str) -> DocumentSnapshot:
        footer = self._snapshot.template.footer.model_copy(update={"text": text})
        return self._commit(self._snapshot.template.model_copy(update={"footer": footer}), self._snapshot.rows)

    # ========== Internals ==========

    def _recalculate(
        self,
        template: DocumentTemplate,
        rows: List[Dict[str, Any]],
        document_type: Optional[DocumentType] = None,
    ) -> DocumentSnapshot:
        doc_type = document_type or self.document_type
        new_rows = recalc_row_totals(rows, template.columns)
        new_footer = recalc_footer(new_rows, template, doc_type, self._id_factory)
        return self._commit(template.model_copy(update={"table_footer": new_footer}), new_rows, doc_type)

    def _commit(
        self,
        template: DocumentTemplate,
        rows: List[Dict[str, Any]],
        document_type: Optional[DocumentType] = None,
    ) -> DocumentSnapshot:
        self._snapshot = DocumentSnapshot(
            document_type=document_type or self.document_type,
            template=template,
            rows=rows,
        )
        for listener in list(self._listeners):
            listener(self.snapshot)
        return self.snapshot

    def _commit_footer(self, lines: List[FooterLine]) -> DocumentSnapshot:
        return self._commit(self._snapshot.template.model_copy(update={"table_footer": lines}), self._snapshot.rows)

    def _update_footer_line(self, line_id: str, **changes: str) -> DocumentSnapshot:
        self._get_footer_line(line_id)
        lines = [
            line.model_copy(update=changes) if line.id == line_id else line
            for line in self.footer_lines
        ]
        return self._commit_footer(lines)

    def _get_column(self, column_id: str) -> Column:
        for col in self._snapshot.template.columns:
            if col.id == column_id:
                return col
        logger.warning(f"Column '{column_id}' not found")
        raise NotFoundError(f"Column '{column_id}' not found")

    def _get_footer_line(self, line_id: str) -> FooterLine:
        for line in self._snapshot.template.table_footer:
            if line.id == line_id:
                return line
        logger.warning(f"Footer line '{line_id}' not found")
        raise NotFoundError(f"Footer line '{line_id}' not found")

    @staticmethod
    def _check_row_index(index: int, rows: List[Dict[str, Any]]) -> None:
        if not 0 <= index < len(rows):
            logger.warning(f"Row index {index} out of range for {len(rows)} rows")
            raise IndexError(f"Row index {index} out of range for {len(rows)} rows")
