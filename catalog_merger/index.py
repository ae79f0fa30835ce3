"""Partner index construction and header comparison."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import MissingColumnError
from .models import Record, StructuralDifference
from .policy import KEY_FIELD, PARTNER_KEY_FIELD

logger = logging.getLogger(__name__)

PartnerIndex = dict[str, Record]


def build_partner_index(
    rows: Iterable[Record],
    *,
    key_field: str = PARTNER_KEY_FIELD,
    sku_field: str = KEY_FIELD,
    source: str = "partner",
) -> PartnerIndex:
    """Load every partner row into a mapping keyed by master SKU.

    The partner key is copied into the `sku` field so partner records can be
    compared with master records field by field. A later row with the same
    key replaces the earlier one.
    """

    index: PartnerIndex = {}
    for row_number, row in enumerate(rows, start=1):
        sku = row.get(key_field)
        if sku is None:
            raise MissingColumnError(key_field, source, row_number=row_number)

        record = row.copy()
        record.set(sku_field, sku)
        if sku in index:
            logger.debug("Partner SKU %s appears more than once; keeping row %d", sku, row_number)
        index[sku] = record

    logger.info("Indexed %d partner products", len(index))
    return index


def structural_difference(master_header: Iterable[str], partner_header: Iterable[str]) -> StructuralDifference:
    """Return the columns found in only one of the two headers."""

    master = set(master_header)
    partner = set(partner_header)
    return StructuralDifference(
        master_only=tuple(sorted(master - partner)),
        partner_only=tuple(sorted(partner - master)),
    )
