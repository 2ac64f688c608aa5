"""
Reports Module
Provider-agnostic report tree and label-based metric extraction.
"""

from cashlens.reports.extractor import (
    extract_flat,
    extract_nested,
    extract_section_sum,
)
from cashlens.reports.tree import EMPTY_TREE, Cell, ReportTree, Section

__all__ = [
    "Cell",
    "Section",
    "ReportTree",
    "EMPTY_TREE",
    "extract_flat",
    "extract_nested",
    "extract_section_sum",
]
