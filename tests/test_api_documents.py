from io import BytesIO

from openpyxl import load_workbook


def _create(client, document_type=None):
    body = {"document_type": document_type} if document_type else {}
    response = client.post("/api/documents", json=body)
    assert response.status_code == 201
    data = response.json()
    return data["session_id"], data["document"]


def _footer(document):
    return {line["label"]: line["value"] for line in document["template"]["table_footer"]}


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_defaults_to_invoice(client):
    session_id, document = _create(client)

    assert document["document_type"] == "invoice"
    assert len(document["rows"]) == 1
    assert document["template"]["columns"][7] == {
        "id": "rowTotal", "label": "Total", "visible": True, "readOnly": True,
    }
    assert client.get(f"/api/documents/{session_id}").json() == document


def test_edit_cells_recalculates(client):
    session_id, _ = _create(client)

    client.put(f"/api/documents/{session_id}/rows/0/cells/quantity", json={"value": 2})
    response = client.put(f"/api/documents/{session_id}/rows/0/cells/price", json={"value": "$100"})
    assert response.status_code == 200
    assert response.json()["rows"][0]["rowTotal"] == "200.00"

    client.post(f"/api/documents/{session_id}/rows")
    document = client.put(f"/api/documents/{session_id}/rows/1/cells/price", json={"value": "110"}).json()

    assert _footer(document)["Subtotal"] == "310.00"
    assert _footer(document)["Total"] == "320.00"

    document = client.delete(f"/api/documents/{session_id}/rows/0").json()
    assert _footer(document)["Subtotal"] == "110.00"


def test_bulk_rows_and_packing_slip(client):
    session_id, _ = _create(client, "packing-slip")

    response = client.put(f"/api/documents/{session_id}/rows", json={"rows": [
        {"packages": 2, "unitsPerPackage": 5, "unitPrice": 1},
        {"packages": 1, "unitsPerPackage": 3, "unitPrice": 1},
    ]})

    assert response.status_code == 200
    assert _footer(response.json())["Total Items"] == "13"

    document = client.post(f"/api/documents/{session_id}/columns/packages/toggle").json()
    assert _footer(document)["Total Items"] == "0"


def test_switch_document_type_resets(client):
    session_id, _ = _create(client)
    client.post(f"/api/documents/{session_id}/rows")
    client.post(f"/api/documents/{session_id}/footer-lines")

    document = client.put(
        f"/api/documents/{session_id}/document-type", json={"document_type": "packing-slip"}
    ).json()

    assert document["document_type"] == "packing-slip"
    assert len(document["rows"]) == 1
    assert [ln["id"] for ln in document["template"]["table_footer"]] == [
        "tax-line", "subtotal-line", "total-line", "total-items",
    ]


def test_footer_line_edits_and_reorder(client):
    session_id, _ = _create(client)

    document = client.post(f"/api/documents/{session_id}/footer-lines").json()
    new_line = document["template"]["table_footer"][-1]
    assert (new_line["label"], new_line["value"]) == ("New Line", "0.00")

    document = client.patch(
        f"/api/documents/{session_id}/footer-lines/{new_line['id']}",
        json={"label": "Shipping", "value": "4.00"},
    ).json()
    assert _footer(document)["Shipping"] == "4.00"

    document = client.post(
        f"/api/documents/{session_id}/footer-lines/reorder", json={"from_index": 3, "to_index": 0}
    ).json()
    assert document["template"]["table_footer"][0]["label"] == "Shipping"

    cancelled = client.post(f"/api/documents/{session_id}/footer-lines/reorder", json={"from_index": 0}).json()
    assert cancelled == document

    document = client.delete(f"/api/documents/{session_id}/footer-lines/{new_line['id']}").json()
    assert "Shipping" not in _footer(document)


def test_columns_reorder_rename_toggle(client):
    session_id, _ = _create(client)

    document = client.post(
        f"/api/documents/{session_id}/columns/reorder", json={"from_index": 1, "to_index": 0}
    ).json()
    assert [c["id"] for c in document["template"]["columns"][:2]] == ["description", "product"]

    document = client.put(
        f"/api/documents/{session_id}/columns/product/label", json={"label": "Item"}
    ).json()
    assert document["template"]["columns"][1]["label"] == "Item"

    document = client.post(f"/api/documents/{session_id}/columns/discount/toggle").json()
    discount = next(c for c in document["template"]["columns"] if c["id"] == "discount")
    assert discount["visible"] is True


def test_header_and_footer_text(client):
    session_id, _ = _create(client)

    document = client.put(
        f"/api/documents/{session_id}/header", json={"customer_info": "ACME", "date": "2026-10-19"}
    ).json()
    assert document["template"]["header"]["customer_info"] == "ACME"
    assert document["template"]["header"]["company_name"] == "My Company Ltd."

    document = client.put(f"/api/documents/{session_id}/footer-text", json={"text": "<p>Bye</p>"}).json()
    assert document["template"]["footer"]["text"] == "<p>Bye</p>"


def test_error_mapping(client):
    session_id, _ = _create(client)
    base = f"/api/documents/{session_id}"

    assert client.get("/api/documents/nope").status_code == 404
    assert client.delete(f"{base}/rows/5").status_code == 404
    assert client.put(f"{base}/rows/0/cells/weight", json={"value": 1}).status_code == 404
    assert client.put(f"{base}/rows/0/cells/rowTotal", json={"value": "1"}).status_code == 400
    assert client.patch(f"{base}/footer-lines/missing", json={"value": "1"}).status_code == 404
    assert client.patch(f"{base}/footer-lines/tax-line", json={}).status_code == 400
    assert client.post(f"{base}/columns/reorder", json={"from_index": 0, "to_index": 99}).status_code == 404
    assert client.post("/api/documents", json={"document_type": "receipt"}).status_code == 422


def test_export_returns_workbook(client):
    session_id, _ = _create(client)
    client.put(f"/api/documents/{session_id}/rows/0/cells/price", json={"value": "12"})

    response = client.get(f"/api/documents/{session_id}/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/vnd.openxmlformats")
    workbook = load_workbook(BytesIO(response.content))
    cells = [cell for row in workbook.active.iter_rows(values_only=True) for cell in row]
    assert cells[cells.index("Subtotal:") + 1] == "12.00"
    workbook.close()


def test_discard_session(client):
    session_id, _ = _create(client)

    assert client.delete(f"/api/documents/{session_id}").status_code == 204
    assert client.get(f"/api/documents/{session_id}").status_code == 404
    assert client.delete(f"/api/documents/{session_id}").status_code == 404


def test_nested_cell_values_are_rejected(client):
    session_id, _ = _create(client)
    base = f"/api/documents/{session_id}"

    assert client.put(f"{base}/rows/0/cells/product", json={"value": {"a": 1}}).status_code == 422
    assert client.put(f"{base}/rows", json={"rows": [{"product": ["x"]}]}).status_code == 422
    assert client.get(f"{base}/export").status_code == 200


def test_export_leaves_no_file_behind(client):
    from core.system_config import sys_config

    session_id, _ = _create(client)

    assert client.get(f"/api/documents/{session_id}/export").status_code == 200
    assert list(sys_config.output_dir.glob(f"{session_id}*.xlsx")) == []
