# core/document_template/generate_document.py
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if __name__ == "__main__":
    try:
        # Resolve project root (core/document_template/generate_document.py)
        root_path = Path(__file__).resolve().parents[2]
        if str(root_path) not in sys.path:
            sys.path.insert(0, str(root_path))
    except IndexError:
        pass

from core.document_template.builders.document_builder import export_snapshot
from core.document_template.errors import DocumentTemplateError
from core.document_template.template_state import TemplateState
from core.utils.snitch import snitch, start_trace

logger = logging.getLogger(__name__)


def apply_document_data(state: TemplateState, data: Dict[str, Any]) -> TemplateState:
    """
    Replays a JSON document description onto a template state.

    Recognized keys (all optional): ``header``, ``visible_columns``, ``rows``,
    ``footer_lines`` and ``footer_text``. The document type is expected to be
    selected on ``state`` already, since switching it resets everything.
    """
    if data.get("header"):
        state.set_header(**data["header"])

    visible = data.get("visible_columns")
    if visible is not None:
        wanted = set(visible)
        for col in state.template.columns:
            if col.visible != (col.id in wanted):
                state.toggle_column_visibility(col.id)

    # Footer lines are matched by label: existing lines take the value, new ones are appended
    for entry in data.get("footer_lines", []):
        label = entry["label"]
        value = str(entry.get("value", ""))
        line = state.find_footer_line(label)
        if line is None:
            state.add_footer_line()
            line = state.footer_lines[-1]
            state.set_footer_line_label(line.id, label)
        state.set_footer_line_value(line.id, value)

    rows = data.get("rows")
    if rows is None:
        rows = state.rows
    elif not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        raise ValueError("'rows' must be a list of objects")

    # One recalculation pass so Total picks up any Tax supplied above
    state.load_rows(rows)

    if "footer_text" in data:
        state.set_footer_text(data["footer_text"])

    return state


@snitch
def run_document_generation(
    input_data_path: Path,
    output_path: Path,
    document_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Builds a document from a JSON description and exports it as .xlsx.

    Returns:
        The export session summary.
    """
    with open(input_data_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    from core.system_config import sys_config

    doc_type = document_type or data.get("document_type") or sys_config.default_document_type
    state = apply_document_data(TemplateState(doc_type), data)

    logger.info(f"Generating {state.document_type.value} with {len(state.rows)} rows")
    return export_snapshot(state.snapshot, output_path)


def main():
    """CLI Entry point."""
    parser = argparse.ArgumentParser(description="Generate a document (invoice / packing slip) as .xlsx")
    parser.add_argument("input_data_file", help="Path to the JSON document description")
    parser.add_argument("-o", "--output", default=None, help="Output path (default: OUTPUT_DIR/<input stem>.xlsx)")
    parser.add_argument("--type", dest="document_type", choices=["invoice", "packing-slip"], help="Override the document type")
    parser.add_argument("--debug", action="store_true", help="Debug logging")

    args = parser.parse_args()

    from core.logger_config import setup_logging
    from core.system_config import sys_config

    setup_logging(log_dir=sys_config.run_log_dir, level=logging.DEBUG if args.debug else sys_config.log_level)
    start_trace()

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = sys_config.output_dir / f"{Path(args.input_data_file).stem}.xlsx"

    try:
        summary = run_document_generation(
            input_data_path=Path(args.input_data_file),
            output_path=output_path,
            document_type=args.document_type,
        )
        print(f"Successfully generated: {summary['output_path']}")
    except (OSError, ValueError, KeyError, DocumentTemplateError) as e:
        print(f"Generation failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
