"""
QuickBooks Report Adapters
Map QuickBooks Online report JSON into the ReportTree model.

QuickBooks strategy: single-row lookup, first match wins.
- P&L rows carry their label at Header.ColData[0].value and the amount
  at ColData[1].value.
- Balance sheet sections carry child rows under Rows.Row, each with the
  label at ColData[0].value and the amount at ColData[1].value.
- Cash is the "Cash and cash equivalents" balance sheet line.
"""

import logging
from typing import Any, Optional

from cashlens.core.utils import parse_amount, safe_get, safe_list_get
from cashlens.reports.extractor import extract_flat, extract_nested
from cashlens.reports.tree import Cell, ReportTree, Section

logger = logging.getLogger(__name__)

CASH_LABEL = "Cash and cash equivalents"
REVENUE_LABEL = "Total Income"
EXPENSES_LABEL = "Total Expenses"


def _report_rows(report: Any) -> list:
    rows = safe_get(safe_get(report, "Rows"), "Row", [])
    return rows if isinstance(rows, list) else []


def _col_value(col_data: Any, index: int) -> Any:
    return safe_get(safe_list_get(col_data, index), "value")


def _label(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def profit_and_loss_to_tree(report: dict[str, Any]) -> ReportTree:
    """
    Convert a QuickBooks ProfitAndLoss report into a flat ReportTree.

    Only rows that carry both ColData and a Header label become cells.

    Args:
        report: Raw ProfitAndLoss JSON

    Returns:
        ReportTree with one untitled flat section
    """
    cells = []
    for row in _report_rows(report):
        if not isinstance(row, dict):
            continue

        col_data = row.get("ColData")
        if not isinstance(col_data, list):
            continue

        label = _label(_col_value(safe_get(safe_get(row, "Header"), "ColData"), 0))
        if label is None:
            continue

        cells.append(Cell(label=label, value=parse_amount(_col_value(col_data, 1))))

    return ReportTree(sections=(Section(rows=tuple(cells)),))


def balance_sheet_to_tree(report: dict[str, Any]) -> ReportTree:
    """
    Convert a QuickBooks BalanceSheet report into a nested ReportTree.

    Each top-level section with child rows becomes a child section of a
    single root section named after the report.
    """
    children = []
    for section in _report_rows(report):
        child_rows = safe_get(safe_get(section, "Rows"), "Row")
        if not isinstance(child_rows, list):
            continue

        cells = []
        for row in child_rows:
            col_data = safe_get(row, "ColData")
            if not isinstance(col_data, list):
                continue

            label = _label(_col_value(col_data, 0))
            if label is None:
                continue

            cells.append(Cell(label=label, value=parse_amount(_col_value(col_data, 1))))

        title = _label(_col_value(safe_get(safe_get(section, "Header"), "ColData"), 0))
        children.append(Section(title=title, rows=tuple(cells)))

    if not children:
        return ReportTree()

    report_name = _label(safe_get(safe_get(report, "Header"), "ReportName"))
    return ReportTree(sections=(Section(title=report_name, sections=tuple(children)),))


def _extract(description: str, func, *args) -> float:
    """Run one extraction, absorbing any failure as 0.0."""
    try:
        return func(*args)
    except Exception as e:
        logger.warning("QuickBooks %s extraction failed, using 0: %s", description, e)
        return 0.0


def extract_cash_balance(balance_sheet: dict[str, Any]) -> float:
    """Cash from the "Cash and cash equivalents" balance sheet line."""
    return _extract(
        "cash",
        lambda raw: extract_nested(balance_sheet_to_tree(raw), CASH_LABEL),
        balance_sheet,
    )


def extract_revenue(profit_and_loss: dict[str, Any]) -> float:
    """Revenue from the "Total Income" P&L row."""
    return _extract(
        "revenue",
        lambda raw: extract_flat(profit_and_loss_to_tree(raw), REVENUE_LABEL),
        profit_and_loss,
    )


def extract_expenses(profit_and_loss: dict[str, Any]) -> float:
    """Expenses from the "Total Expenses" P&L row."""
    return _extract(
        "expenses",
        lambda raw: extract_flat(profit_and_loss_to_tree(raw), EXPENSES_LABEL),
        profit_and_loss,
    )
