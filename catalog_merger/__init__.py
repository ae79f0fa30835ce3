"""Public API exports for the catalog merger."""

from .diff import Segment, diff_segments, render_diff, render_structural_difference
from .errors import CatalogMergeError, EmptyCatalogError, InputExhaustedError, MissingColumnError
from .index import build_partner_index, structural_difference
from .models import Conflict, MergeSettings, MergeSummary, Record, StructuralDifference, is_master_variant
from .policy import IGNORED_FIELDS, LOCALIZED_FIELDS, should_compare
from .reconcile import CatalogReconciler, merge_catalogs
from .resolution import AcceptPartnerStrategy, InteractiveStrategy, ResolutionStrategy, strategy_for
from .store import Catalog, CatalogWriter, read_catalog

__all__ = [
    "AcceptPartnerStrategy",
    "Catalog",
    "CatalogMergeError",
    "CatalogReconciler",
    "CatalogWriter",
    "Conflict",
    "EmptyCatalogError",
    "IGNORED_FIELDS",
    "InputExhaustedError",
    "InteractiveStrategy",
    "LOCALIZED_FIELDS",
    "MergeSettings",
    "MergeSummary",
    "MissingColumnError",
    "Record",
    "ResolutionStrategy",
    "Segment",
    "StructuralDifference",
    "build_partner_index",
    "diff_segments",
    "is_master_variant",
    "merge_catalogs",
    "read_catalog",
    "render_diff",
    "render_structural_difference",
    "should_compare",
    "strategy_for",
    "structural_difference",
]
