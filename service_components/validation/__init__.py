"""
Validation module - Identifier checksums and pattern-based field validators.
"""

from service_components.validation.checksums import (
    company_number_checksum,
    is_valid_company_number,
    is_valid_taxpayer_number,
    taxpayer_number_checksum,
)
from service_components.validation.validators import (
    PATTERNS,
    VALIDATORS,
    ValidationOutcome,
    Validator,
    ensure_valid,
    validate,
)

__all__ = [
    "company_number_checksum",
    "is_valid_company_number",
    "taxpayer_number_checksum",
    "is_valid_taxpayer_number",
    "PATTERNS",
    "VALIDATORS",
    "ValidationOutcome",
    "Validator",
    "ensure_valid",
    "validate",
]
