"""
Shared helper functions
"""

from .validation_utils import (
    is_valid_domain,
    validate_required_fields,
    is_valid_price,
    is_valid_inventory,
)
from .file_utils import ensure_directory, safe_filename, write_json

__all__ = [
    "is_valid_domain",
    "validate_required_fields",
    "is_valid_price",
    "is_valid_inventory",
    "ensure_directory",
    "safe_filename",
    "write_json",
]
