from core.document_template.data.footer_lines import find_line, make_footer_line, upsert
from core.document_template.models import FooterLine


def _ids():
    counter = iter(range(1, 100))
    return lambda: f"new-{next(counter)}"


def test_upsert_appends_missing_label_verbatim():
    lines = [FooterLine(id="a", label="Tax", value="1.00")]

    result = upsert(lines, "Subtotal", "5.00", _ids())

    assert [ln.label for ln in result] == ["Tax", "Subtotal"]
    assert result[1] == FooterLine(id="new-1", label="Subtotal", value="5.00")
    assert lines == [FooterLine(id="a", label="Tax", value="1.00")]


def test_upsert_updates_in_place_keeping_label_id_and_position():
    lines = [
        FooterLine(id="a", label=" tax ", value="1.00"),
        FooterLine(id="b", label="Note", value="x"),
    ]

    result = upsert(lines, "Tax", "5.00")

    assert len(result) == 2
    assert result[0] == FooterLine(id="a", label=" tax ", value="5.00")
    assert result[1] == lines[1]


def test_upsert_is_idempotent():
    lines = [FooterLine(id="a", label="Subtotal", value="0.00")]
    ids = _ids()

    once = upsert(lines, "Tax", "5.00", ids)
    twice = upsert(once, "Tax", "5.00", ids)

    assert twice == once


def test_upsert_only_touches_first_match():
    lines = [
        FooterLine(id="a", label="Total", value="1"),
        FooterLine(id="b", label="TOTAL", value="2"),
    ]

    result = upsert(lines, "total", "9")

    assert [ln.value for ln in result] == ["9", "2"]


def test_find_line_normalizes_labels():
    lines = [FooterLine(id="a", label="  Total Items", value="3")]
    assert find_line(lines, "total items").id == "a"
    assert find_line(lines, "Total") is None


def test_make_footer_line_generates_unique_ids():
    first = make_footer_line("New Line", "0.00")
    second = make_footer_line("New Line", "0.00")
    assert first.id != second.id


def test_computed_flag_follows_label():
    assert FooterLine(id="x", label=" subtotal ", value="0").is_computed
    assert FooterLine(id="x", label="Total Items", value="0").is_computed
    assert not FooterLine(id="x", label="Tax", value="0").is_computed
