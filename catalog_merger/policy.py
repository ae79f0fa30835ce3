"""Column names and the rule deciding which fields take part in comparison."""

from __future__ import annotations

KEY_FIELD = "sku"
PARTNER_KEY_FIELD = "msku"
PUBLISHED_FIELD = "_published"
PRODUCT_NAME_FIELD = "name.de"

# Custom attributes maintained on the master project only.
IGNORED_FIELDS = frozenset(
    {
        "ConsiderForSearch",
        "ContentDescription",
        "PartnerProduct",
        "PartnerShop",
        "PartnerShops",
        "QAValidation",
        "QAValidationMessage",
        "RedaktionellerContent",
        "Validation",
        "ValidationMessage",
        "ValidationException",
    }
)

# Product-level fields compared against the parent row, whatever their casing.
LOCALIZED_FIELDS = (PRODUCT_NAME_FIELD, "description.de")


def should_compare(field_name: str) -> bool:
    """Return whether a column is a custom attribute eligible for comparison.

    Custom attributes are CamelCase; lower-case columns are the product
    export's own fields and are never compared.
    """

    if not field_name or not field_name[0].isupper():
        return False
    return field_name not in IGNORED_FIELDS


def is_localized_field(field_name: str) -> bool:
    return field_name in LOCALIZED_FIELDS
