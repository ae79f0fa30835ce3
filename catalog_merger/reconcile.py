"""Reconciliation of a master catalog export against a partner export.

Master rows arrive grouped by product: a parent row (non-empty `_published`)
followed by its variant rows. Each variant is looked up in the partner index
and every differing field is resolved through a `ResolutionStrategy`.

The parent is held back until its first variant has been reconciled so that
revisions found on a variant can still be applied to the parent before it is
written. Output order always matches the master file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import IO

from rich.console import Console

from .diff import render_structural_difference
from .errors import EmptyCatalogError, MissingColumnError
from .index import PartnerIndex, build_partner_index, structural_difference
from .models import Conflict, MergeSettings, MergeSummary, Record, is_master_variant
from .policy import PRODUCT_NAME_FIELD, is_localized_field, should_compare
from .resolution import ResolutionStrategy
from .store import Catalog, CatalogWriter

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT = "<unknown>"


class CatalogReconciler:
    """Walk master rows in file order and write the merged catalog."""

    def __init__(
        self,
        partner_index: PartnerIndex,
        strategy: ResolutionStrategy,
        *,
        console: Console | None = None,
        settings: MergeSettings | None = None,
    ) -> None:
        self.partner_index = partner_index
        self.strategy = strategy
        self.console = console or strategy.console
        self.settings = settings or MergeSettings()
        self.summary = MergeSummary()
        # Parent waiting to be written; may still receive revisions.
        self._pending_parent: Record | None = None
        # Parent as read from the master file, for names and localized fields.
        self._last_parent: Record | None = None

    def run(self, master_rows: Iterable[Record], writer: CatalogWriter) -> MergeSummary:
        for record in master_rows:
            self.summary.rows_read += 1
            if is_master_variant(record, published_field=self.settings.published_field):
                self._start_group(record, writer)
            else:
                self._reconcile_variant(record, writer)
        self._flush_parent(writer)
        return self.summary

    def _write(self, writer: CatalogWriter, record: Record) -> None:
        writer.write(record)
        self.summary.rows_written += 1

    def _flush_parent(self, writer: CatalogWriter) -> None:
        if self._pending_parent is not None:
            self._write(writer, self._pending_parent)
            self._pending_parent = None

    def _start_group(self, record: Record, writer: CatalogWriter) -> None:
        self._flush_parent(writer)
        self.summary.parents += 1
        self._pending_parent = record.copy()
        self._last_parent = record

    def _product_name(self) -> str:
        if self._last_parent is None:
            return UNKNOWN_PRODUCT
        return self._last_parent.get(PRODUCT_NAME_FIELD, UNKNOWN_PRODUCT)

    def _reconcile_variant(self, record: Record, writer: CatalogWriter) -> None:
        self.summary.children += 1
        output = record.copy()

        sku = record.get(self.settings.key_field)
        partner = self.partner_index.get(sku) if sku is not None else None
        if partner is not None:
            self.summary.matched_children += 1
            for key in record.fields:
                if should_compare(key):
                    self._compare_attribute(key, sku, record, partner, output)
                elif is_localized_field(key):
                    self._compare_localized(key, sku, partner)

        self._flush_parent(writer)
        self._write(writer, output)

    def _compare_attribute(self, key: str, sku: str, record: Record, partner: Record, output: Record) -> None:
        partner_value = partner.get(key)
        if partner_value is None:
            return
        master_value = record.get(key, "")
        if master_value == partner_value:
            return

        value = self._resolve(
            Conflict(
                field=key,
                sku=sku,
                product_name=self._product_name(),
                master_value=master_value,
                partner_value=partner_value,
            )
        )
        output.set(key, value)
        if self._pending_parent is not None:
            self._pending_parent.set(key, value)

    def _compare_localized(self, key: str, sku: str, partner: Record) -> None:
        partner_value = partner.get(key)
        parent_value = self._last_parent.get(key) if self._last_parent is not None else None
        if partner_value is None or parent_value is None or partner_value == parent_value:
            return

        value = self._resolve(
            Conflict(
                field=key,
                sku=sku,
                product_name=self._product_name(),
                master_value=parent_value,
                partner_value=partner_value,
            )
        )
        if self._pending_parent is not None:
            self._pending_parent.set(key, value)

    def _resolve(self, conflict: Conflict) -> str:
        self.summary.conflicts += 1
        self.console.print(conflict.describe(), markup=False, highlight=False)
        value = self.strategy.resolve(conflict.master_value, conflict.partner_value)
        logger.debug("Resolved %s on %s to %r", conflict.field, conflict.sku, value)
        return value


def _check_master_header(master: Catalog, settings: MergeSettings) -> None:
    if not master.header:
        raise EmptyCatalogError(f"{master.name} has no header row")
    for column in (settings.published_field, settings.key_field):
        if column not in master.header:
            raise MissingColumnError(column, master.name)


def merge_catalogs(
    master: Catalog,
    partner: Catalog,
    output: IO[str],
    strategy: ResolutionStrategy,
    *,
    settings: MergeSettings | None = None,
    console: Console | None = None,
) -> MergeSummary:
    """Reconcile `master` against `partner` and write the merged rows to `output`.

    The partner export is indexed completely before the first master row is
    read. The output header is the master header verbatim.
    """

    settings = settings or MergeSettings()
    console = console or strategy.console
    _check_master_header(master, settings)

    partner_index = build_partner_index(
        partner.rows,
        key_field=settings.partner_key_field,
        sku_field=settings.key_field,
        source=partner.name,
    )

    console.print()
    console.print("structural differences:")
    console.print(render_structural_difference(structural_difference(master.header, partner.header)))
    console.print()

    writer = CatalogWriter(output, master.header, delimiter=settings.delimiter)
    writer.write_header()

    reconciler = CatalogReconciler(partner_index, strategy, console=console, settings=settings)
    summary = reconciler.run(master.rows, writer)
    logger.info(
        "Wrote %d rows (%d products, %d variants, %d matched, %d conflicts)",
        summary.rows_written,
        summary.parents,
        summary.children,
        summary.matched_children,
        summary.conflicts,
    )
    return summary
