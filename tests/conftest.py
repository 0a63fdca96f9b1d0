import os
import tempfile

# Keep logs and exports out of the project tree; must happen before core/api imports
_TMP_ROOT = tempfile.mkdtemp(prefix="doc-editor-tests-")
os.environ.setdefault("RUN_LOG_DIR", os.path.join(_TMP_ROOT, "run_log"))
os.environ.setdefault("OUTPUT_DIR", os.path.join(_TMP_ROOT, "output"))

import itertools

import pytest

from core.document_template.models import DocumentType
from core.document_template.template_state import TemplateState


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"line-{next(counter)}"


@pytest.fixture
def invoice_state(id_factory):
    return TemplateState(DocumentType.INVOICE, id_factory=id_factory)


@pytest.fixture
def packing_state(id_factory):
    return TemplateState(DocumentType.PACKING_SLIP, id_factory=id_factory)


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from api.main import app
    from api.session_store import session_store

    session_store.clear()
    with TestClient(app) as test_client:
        yield test_client
    session_store.clear()
