# Utility modules for the costing app
from .sanitizer import sanitize_text, sanitize_sku
from .validation import (
    ValidationError, require_fields, parse_float, parse_int,
    optional_float, optional_id, require_choice
)
