from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Sequence, TypeVar

from models.company_record import CompanyRecord
from models.contact_record import ContactRecord
from services.search import UNKNOWN_COMPANY_LABEL


T = TypeVar("T")

NO_DATA_TEXT = "No data available"


@dataclass(frozen=True)
class Column(Generic[T]):
    """A table column: either a plain attribute accessor or a render function."""

    header: str
    accessor: Optional[str] = None
    render: Optional[Callable[[T], Any]] = None

    def cell(self, row: T) -> str:
        if self.render is not None:
            value = self.render(row)
        elif self.accessor is not None:
            value = getattr(row, self.accessor, None)
        else:
            value = None
        return "" if value is None else str(value)


@dataclass(frozen=True)
class TableRow:
    key: Optional[str]
    cells: List[str]
    # True only for the "no data" row, whose single cell spans every column
    placeholder: bool = False


class TableView(Generic[T]):
    """Lazily projected rows; nothing is rendered until iterated."""

    def __init__(self, rows: Sequence[T], columns: Sequence[Column[T]], key: Optional[Callable[[T], str]] = None):
        self.rows = rows
        self.columns = list(columns)
        self.key = key

    @property
    def headers(self) -> List[str]:
        return [c.header for c in self.columns]

    def __iter__(self) -> Iterator[TableRow]:
        if not self.rows:
            yield TableRow(key=None, cells=[NO_DATA_TEXT], placeholder=True)
            return
        for row in self.rows:
            yield TableRow(
                key=self.key(row) if self.key else None,
                cells=[column.cell(row) for column in self.columns],
            )

    def to_text(self) -> str:
        """Fixed-width plain-text rendering."""
        rendered = list(self)
        widths = [len(h) for h in self.headers]
        for row in rendered:
            if row.placeholder:
                continue
            for index, cell in enumerate(row.cells):
                widths[index] = max(widths[index], len(cell))
        total_width = sum(widths) + 3 * (len(widths) - 1)

        lines = [" | ".join(h.ljust(w) for h, w in zip(self.headers, widths)).rstrip()]
        lines.append("-+-".join("-" * w for w in widths))
        for row in rendered:
            if row.placeholder:
                lines.append(row.cells[0].center(total_width).rstrip())
            else:
                lines.append(" | ".join(c.ljust(w) for c, w in zip(row.cells, widths)).rstrip())
        return "\n".join(lines)


def render_table(rows: Sequence[T], columns: Sequence[Column[T]], key: Optional[Callable[[T], str]] = None) -> TableView[T]:
    return TableView(rows, columns, key=key)


def company_columns() -> List[Column[CompanyRecord]]:
    return [
        Column("Company", accessor="name"),
        Column("Industry", accessor="industry"),
        Column("Location", accessor="location"),
        Column("Employees", accessor="employees"),
    ]


def contact_columns(companies: Sequence[CompanyRecord]) -> List[Column[ContactRecord]]:
    names: Dict[str, str] = {c.id: c.name for c in companies}
    return [
        Column("Name", accessor="name"),
        Column("Company", accessor="owner_id", render=lambda contact: names.get(contact.owner_id, UNKNOWN_COMPANY_LABEL)),
        Column("Position", accessor="position"),
        Column("Email", accessor="email"),
        Column("Phone", accessor="phone"),
    ]


def company_contact_columns() -> List[Column[ContactRecord]]:
    return [
        Column("Name", accessor="name"),
        Column("Position", accessor="position"),
        Column("Email", accessor="email"),
        Column("Phone", accessor="phone"),
    ]
