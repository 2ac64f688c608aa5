import pytest

from cashlens.reports import (
    EMPTY_TREE,
    Cell,
    ReportTree,
    Section,
    extract_flat,
    extract_nested,
    extract_section_sum,
)


def _flat_tree(*cells: Cell) -> ReportTree:
    return ReportTree(sections=(Section(rows=cells),))


def _nested_tree(*children: Section) -> ReportTree:
    return ReportTree(sections=(Section(title="Balance Sheet", sections=children),))


def test_extract_flat_returns_first_match_in_document_order():
    tree = _flat_tree(
        Cell("Total Income", 1000.0),
        Cell("Total Expenses", 700.0),
        Cell("Total Income", 9999.0),
    )
    assert extract_flat(tree, "Total Income") == 1000.0
    assert extract_flat(tree, "Total Expenses") == 700.0


def test_extract_flat_uses_exact_label_equality():
    tree = _flat_tree(Cell("Total Income ", 1000.0), Cell("total income", 5.0))
    assert extract_flat(tree, "Total Income") == 0.0


def test_extract_flat_does_not_search_nested_rows():
    tree = _nested_tree(Section(title="ASSETS", rows=(Cell("Total Income", 1000.0),)))
    assert extract_flat(tree, "Total Income") == 0.0


@pytest.mark.parametrize("tree", [EMPTY_TREE, _flat_tree(), _flat_tree(Cell("Other", 1.0))])
def test_missing_label_extracts_as_zero(tree):
    assert extract_flat(tree, "Total Income") == 0.0
    assert extract_nested(tree, "Total Income") == 0.0
    assert extract_section_sum(tree, "Revenue") == 0.0


def test_missing_value_extracts_as_zero():
    tree = _flat_tree(Cell("Total Income", None))
    assert extract_flat(tree, "Total Income") == 0.0


def test_extract_nested_first_match_across_sections():
    tree = _nested_tree(
        Section(title="ASSETS", rows=(Cell("Receivables", 10.0), Cell("Cash", 250.0))),
        Section(title="LIABILITIES", rows=(Cell("Cash", -1.0),)),
    )
    assert extract_nested(tree, "Cash") == 250.0


def test_extract_nested_ignores_top_level_rows():
    tree = _flat_tree(Cell("Cash", 250.0))
    assert extract_nested(tree, "Cash") == 0.0


def test_section_sum_adds_every_row_not_just_the_first():
    tree = ReportTree(sections=(
        Section(title="Revenue", rows=(Cell("A", 1000.0), Cell("B", 2000.0), Cell("C", 500.0))),
    ))
    assert extract_section_sum(tree, "Revenue") == 3500.0


def test_section_sum_and_first_match_differ_on_same_rows():
    rows = (Cell("Revenue", 1000.0), Cell("Revenue", 2000.0), Cell("Revenue", 500.0))
    tree = ReportTree(sections=(Section(title="Revenue", rows=rows),))
    assert extract_section_sum(tree, "Revenue") == 3500.0
    assert extract_flat(tree, "Revenue") == 1000.0


def test_section_sum_uses_first_matching_section_and_treats_missing_as_zero():
    tree = ReportTree(sections=(
        Section(title="Expenses", rows=(Cell("Rent", 400.0), Cell("Unknown", None))),
        Section(title="Expenses", rows=(Cell("Rent", 9999.0),)),
    ))
    assert extract_section_sum(tree, "Expenses") == 400.0


def test_section_rejects_mixed_layout():
    with pytest.raises(ValueError):
        Section(title="Broken", rows=(Cell("A", 1.0),), sections=(Section(),))
