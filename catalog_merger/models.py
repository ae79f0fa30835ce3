"""Core typed models shared by the store, index and reconciliation modules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .policy import KEY_FIELD, PARTNER_KEY_FIELD, PUBLISHED_FIELD


@dataclass(slots=True)
class Record:
    """One catalog row: the source header plus a field-name to value mapping.

    `fields` is shared by every record read from the same source and keeps the
    column order for writing; `values` only holds the cells that were present.
    """

    fields: tuple[str, ...]
    values: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_cells(cls, fields: tuple[str, ...], cells: Iterable[str]) -> Record:
        """Zip header and cells; extra cells are dropped, missing ones stay absent."""

        return cls(fields=fields, values=dict(zip(fields, cells)))

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.values.get(name, default)

    def __getitem__(self, name: str) -> str:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def set(self, name: str, value: str) -> None:
        self.values[name] = value

    def copy(self) -> Record:
        return Record(fields=self.fields, values=dict(self.values))

    def to_row(self) -> list[str]:
        """Return one cell per header column, using `""` for absent fields."""

        return [self.values.get(name, "") for name in self.fields]


def is_master_variant(record: Record, *, published_field: str = PUBLISHED_FIELD) -> bool:
    """Return whether the row is the parent of a product group."""

    return bool(record.get(published_field))


@dataclass(frozen=True, slots=True)
class Conflict:
    """A field whose master and partner values differ for one product."""

    field: str
    sku: str
    product_name: str
    master_value: str
    partner_value: str

    def describe(self) -> str:
        return f"# Key '{self.field}' on product '{self.sku}' with name '{self.product_name}'"


@dataclass(frozen=True, slots=True)
class StructuralDifference:
    """Header columns found on one side of the merge only."""

    master_only: tuple[str, ...]
    partner_only: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.master_only and not self.partner_only


@dataclass(slots=True)
class MergeSummary:
    """Counters collected while reconciling one pair of catalogs."""

    rows_read: int = 0
    rows_written: int = 0
    parents: int = 0
    children: int = 0
    matched_children: int = 0
    conflicts: int = 0


@dataclass(frozen=True, slots=True)
class MergeSettings:
    """Run configuration for one merge."""

    accept_all: bool = False
    delimiter: str = ","
    key_field: str = KEY_FIELD
    partner_key_field: str = PARTNER_KEY_FIELD
    published_field: str = PUBLISHED_FIELD
