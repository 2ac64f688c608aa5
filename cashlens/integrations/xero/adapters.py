"""
Xero Report Adapters
Map Xero report and account JSON into the ReportTree model.

Xero strategy: section sum.
- Reports[0].Rows is a sequence of titled sections.
- A metric is the sum of the second cell of every row in the section
  whose Title matches exactly. Xero has no single total line to look up.
- Cash is the sum of BankAccountBalance across the bank account listing,
  not a balance sheet line.
"""

import logging
from typing import Any, Optional

from cashlens.core.utils import parse_amount, safe_get, safe_list_get
from cashlens.reports.extractor import extract_section_sum
from cashlens.reports.tree import Cell, ReportTree, Section

logger = logging.getLogger(__name__)

REVENUE_SECTION = "Revenue"
EXPENSES_SECTION = "Expenses"


def _cell_value(cell: Any) -> Any:
    return safe_get(cell, "Value")


def _to_cell(row: Any) -> Optional[Cell]:
    cells = safe_get(row, "Cells")
    if not isinstance(cells, list) or len(cells) < 2:
        return None

    label = _cell_value(safe_list_get(cells, 0))
    return Cell(
        label=label if isinstance(label, str) else "",
        value=parse_amount(_cell_value(safe_list_get(cells, 1))),
    )


def report_to_tree(payload: dict[str, Any]) -> ReportTree:
    """
    Convert a Xero Reports response into a flat, titled ReportTree.

    Sections without a Rows list are dropped so a later section with the
    same title can still match.

    Args:
        payload: Raw response with a top-level "Reports" list

    Returns:
        ReportTree with one flat section per Xero section
    """
    report = safe_list_get(safe_get(payload, "Reports", []), 0)
    rows = safe_get(report, "Rows", [])
    if not isinstance(rows, list):
        return ReportTree()

    sections = []
    for section in rows:
        child_rows = safe_get(section, "Rows")
        if not isinstance(child_rows, list):
            continue

        title = safe_get(section, "Title")
        cells = tuple(cell for cell in map(_to_cell, child_rows) if cell is not None)
        sections.append(
            Section(title=title if isinstance(title, str) else None, rows=cells)
        )

    return ReportTree(sections=tuple(sections))


# Both Xero reports share one layout
profit_and_loss_to_tree = report_to_tree
balance_sheet_to_tree = report_to_tree


def bank_accounts_total(payload: dict[str, Any]) -> float:
    """
    Total cash across a Xero bank account listing.

    Unparsable balances count as 0. A missing listing totals 0.
    """
    accounts = safe_get(payload, "Accounts", [])
    if not isinstance(accounts, list):
        return 0.0

    total = 0.0
    for account in accounts:
        balance = parse_amount(safe_get(account, "BankAccountBalance"))
        if balance is not None:
            total += balance

    return total


def _extract(description: str, func, *args) -> float:
    """Run one extraction, absorbing any failure as 0.0."""
    try:
        return func(*args)
    except Exception as e:
        logger.warning("Xero %s extraction failed, using 0: %s", description, e)
        return 0.0


def extract_cash_balance(bank_accounts: dict[str, Any]) -> float:
    """Cash as the sum of all bank account balances."""
    return _extract("cash", bank_accounts_total, bank_accounts)


def extract_revenue(profit_and_loss: dict[str, Any]) -> float:
    """Revenue as the sum of the "Revenue" section rows."""
    return _extract(
        "revenue",
        lambda raw: extract_section_sum(profit_and_loss_to_tree(raw), REVENUE_SECTION),
        profit_and_loss,
    )


def extract_expenses(profit_and_loss: dict[str, Any]) -> float:
    """Expenses as the sum of the "Expenses" section rows."""
    return _extract(
        "expenses",
        lambda raw: extract_section_sum(profit_and_loss_to_tree(raw), EXPENSES_SECTION),
        profit_and_loss,
    )
