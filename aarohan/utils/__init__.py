"""
Utility functions for the AAROHAN eligibility service
"""

from .validators import (
    validate_email,
    validate_phone,
    parse_date,
    parse_income,
    validate_registration_data,
    extract_text_snippet
)
from .fetch import FetchResult, fetch
from .security import hash_password, verify_password

__all__ = [
    "validate_email",
    "validate_phone",
    "parse_date",
    "parse_income",
    "validate_registration_data",
    "extract_text_snippet",
    "FetchResult",
    "fetch",
    "hash_password",
    "verify_password"
]
