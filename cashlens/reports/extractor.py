"""
Metric Extractor
Label-based lookups over a ReportTree.

Every lookup is total: a missing label, an empty tree or a missing cell
value all extract as 0.0. Showing a zero beats failing the whole insight.
"""

import logging
from typing import Iterable, Optional

from cashlens.reports.tree import Cell, ReportTree

logger = logging.getLogger(__name__)


def _first_match(cells: Iterable[Cell], label: str) -> Optional[Cell]:
    for cell in cells:
        if cell.label == label:
            return cell
    return None


def _value_or_zero(cell: Optional[Cell]) -> float:
    if cell is None or cell.value is None:
        return 0.0
    return float(cell.value)


def extract_flat(tree: ReportTree, label: str) -> float:
    """
    Find a top-level row by exact label.

    First match in document order wins.

    Args:
        tree: Normalized report
        label: Exact row label, e.g. "Total Income"

    Returns:
        The row's value, or 0.0 if no row matches
    """
    match = _first_match(tree.rows(), label)
    if match is None:
        logger.debug("Label %r not found in top-level rows", label)
    return _value_or_zero(match)


def extract_nested(tree: ReportTree, label: str) -> float:
    """
    Find a row one level down by exact label.

    Searches each section's child rows, sections in document order,
    first match wins.
    """
    match = _first_match(tree.nested_rows(), label)
    if match is None:
        logger.debug("Label %r not found in nested rows", label)
    return _value_or_zero(match)


def extract_section_sum(tree: ReportTree, title: str) -> float:
    """
    Sum every row value in the first section titled exactly `title`.

    Missing row values count as 0. Returns 0.0 when no section matches.
    """
    for section in tree:
        if section.title == title:
            return sum((_value_or_zero(row) for row in section.rows), 0.0)

    logger.debug("Section %r not found", title)
    return 0.0
