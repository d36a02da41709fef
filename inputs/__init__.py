"""
Input surface — flat form fields and pre-flight validation.
"""

from .builder import (
    FIELD_GROUPS,
    FIELD_KEYS,
    FIELD_SPECS,
    FieldSpec,
    coerce_number,
    fields_in_group,
    from_field_values,
    shift_base_year,
    to_field_values,
    update_field,
)
from .validators import ValidationResult, validate_inputs

__all__ = [
    "FIELD_GROUPS",
    "FIELD_KEYS",
    "FIELD_SPECS",
    "FieldSpec",
    "ValidationResult",
    "coerce_number",
    "fields_in_group",
    "from_field_values",
    "shift_base_year",
    "to_field_values",
    "update_field",
    "validate_inputs",
]
