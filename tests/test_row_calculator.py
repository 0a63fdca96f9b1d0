from core.document_template.data.row_calculator import RowTotalCalculator, recalc_row_totals
from tests.helpers import columns_with_visible

INVOICE_COLUMNS = columns_with_visible({"product", "quantity", "price", "rowTotal"})
PACKAGING_COLUMNS = columns_with_visible({"product", "packages", "unitsPerPackage", "unitPrice", "rowTotal"})


def test_quantity_formula():
    rows = [{"quantity": 2, "price": "$100", "discount": 0}]
    assert recalc_row_totals(rows, INVOICE_COLUMNS)[0]["rowTotal"] == "200.00"


def test_preserves_row_count_order_and_other_fields():
    rows = [
        {"product": "Chair", "quantity": 2, "price": "$100"},
        {"product": "Table", "quantity": 1, "price": "$300"},
        {"product": "Lamp", "quantity": "", "price": "abc"},
    ]

    result = recalc_row_totals(rows, INVOICE_COLUMNS)

    assert [r["product"] for r in result] == ["Chair", "Table", "Lamp"]
    assert [r["rowTotal"] for r in result] == ["200.00", "300.00", "0.00"]
    assert "rowTotal" not in rows[0]


def test_hidden_quantity_counts_as_one_and_hidden_price_as_zero():
    rows = [{"quantity": 5, "price": "20"}]

    no_quantity = columns_with_visible({"price"})
    no_price = columns_with_visible({"quantity"})

    assert recalc_row_totals(rows, no_quantity)[0]["rowTotal"] == "20.00"
    assert recalc_row_totals(rows, no_price)[0]["rowTotal"] == "0.00"


def test_discount_only_applies_when_visible():
    rows = [{"quantity": 2, "price": "50", "discount": "15"}]

    hidden = recalc_row_totals(rows, INVOICE_COLUMNS)
    shown = recalc_row_totals(rows, columns_with_visible({"quantity", "price", "discount"}))

    assert hidden[0]["rowTotal"] == "100.00"
    assert shown[0]["rowTotal"] == "85.00"


def test_packaging_formula_when_all_three_columns_visible():
    rows = [{"packages": 2, "unitsPerPackage": 5, "unitPrice": "1.50", "discount": 3, "quantity": 9, "price": 9}]

    assert recalc_row_totals(rows, PACKAGING_COLUMNS)[0]["rowTotal"] == "15.00"

    with_discount = columns_with_visible({"packages", "unitsPerPackage", "unitPrice", "discount"})
    assert recalc_row_totals(rows, with_discount)[0]["rowTotal"] == "12.00"


def test_quantity_formula_used_when_a_packaging_column_is_hidden():
    rows = [{"packages": 2, "unitsPerPackage": 5, "unitPrice": 10, "quantity": 3, "price": 4}]
    columns = columns_with_visible({"packages", "unitsPerPackage", "quantity", "price"})

    calculator = RowTotalCalculator(columns)

    assert not calculator.use_packaging
    assert calculator.calculate(rows)[0]["rowTotal"] == "12.00"


def test_negative_totals_are_allowed():
    rows = [{"quantity": 1, "price": "10", "discount": "25"}]
    columns = columns_with_visible({"quantity", "price", "discount"})
    assert recalc_row_totals(rows, columns)[0]["rowTotal"] == "-15.00"


def test_empty_rows():
    assert recalc_row_totals([], INVOICE_COLUMNS) == []
