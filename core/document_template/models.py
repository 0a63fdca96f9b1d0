from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Labels owned by the recalculation pass.
SUBTOTAL_LABEL = "Subtotal"
TOTAL_LABEL = "Total"
TOTAL_ITEMS_LABEL = "Total Items"
TAX_LABEL = "Tax"

COMPUTED_LABELS = (SUBTOTAL_LABEL, TOTAL_LABEL, TOTAL_ITEMS_LABEL)


def normalize_label(label: str) -> str:
    """Case- and whitespace-insensitive form of a footer label, used for matching only."""
    return label.strip().lower()


class DocumentType(str, Enum):
    INVOICE = "invoice"
    PACKING_SLIP = "packing-slip"


class Column(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    label: str
    visible: bool = True
    read_only: bool = Field(False, alias="readOnly")


class FooterLine(BaseModel):
    """
    A label/value pair in the summary block under the table.

    ``id`` identifies the line for direct edits and reordering; the normalized
    ``label`` identifies it for recalculation upserts.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    value: str

    @property
    def is_computed(self) -> bool:
        return normalize_label(self.label) in {normalize_label(lbl) for lbl in COMPUTED_LABELS}


class DocumentHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    company_name: str = ""
    company_address: str = ""
    document_title: str = ""
    customer_info: str = ""
    date: Optional[str] = None


class DocumentFooter(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Serialized rich-text markup, stored and rendered verbatim.
    text: str = ""


class DocumentTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    header: DocumentHeader
    columns: List[Column]
    table_footer: List[FooterLine]
    footer: DocumentFooter

    @property
    def visible_columns(self) -> List[Column]:
        return [col for col in self.columns if col.visible]


class DocumentSnapshot(BaseModel):
    """
    Immutable view of the editor handed to observers and renderers.

    Row totals and footer lines always reflect ``rows`` at the moment the
    snapshot was committed.
    """
    model_config = ConfigDict(frozen=True)

    document_type: DocumentType
    template: DocumentTemplate
    rows: List[Dict[str, Any]]
