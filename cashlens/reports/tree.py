"""
Report Tree Model
=================

Provider-agnostic representation of a nested accounting report.

A report is an ordered sequence of sections. Each section holds either
flat rows of labelled cells or one level of child sections, never both.
Both the QuickBooks and Xero adapters normalize into this shape so the
extractors never look at provider JSON.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass(frozen=True)
class Cell:
    """A labelled line item. A value of None means the source had no number."""
    label: str
    value: Optional[float] = None


@dataclass(frozen=True)
class Section:
    """A report section with either flat rows or nested child sections."""
    title: Optional[str] = None
    rows: tuple[Cell, ...] = ()
    sections: tuple["Section", ...] = ()

    def __post_init__(self) -> None:
        if self.rows and self.sections:
            raise ValueError(
                f"Section {self.title!r} mixes flat rows and nested sections"
            )

    @property
    def is_nested(self) -> bool:
        return bool(self.sections)


@dataclass(frozen=True)
class ReportTree:
    """Ordered sequence of sections making up one report."""
    sections: tuple[Section, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def rows(self) -> Iterator[Cell]:
        """Top-level flat rows in document order."""
        for section in self.sections:
            yield from section.rows

    def nested_rows(self) -> Iterator[Cell]:
        """Rows one level down, across child sections in document order."""
        for section in self.sections:
            for child in section.sections:
                yield from child.rows


EMPTY_TREE = ReportTree()
