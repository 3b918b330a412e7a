"""
Constants Package

Unit tables and validation whitelists shared by the services and routes.
"""

from .units import (
    UNIT_MAPPINGS,
    GRAMS_PER_UNIT,
    VOLUMETRIC_UNITS,
    MASS_UNITS,
    FALLBACK_UNIT,
)

from .validation import (
    VALID_PACKAGING_CATEGORIES,
    PACKAGING_SLOTS,
    SLOT_CATEGORIES,
    VALID_RECIPE_STATUSES,
    PERCENTAGE_TOTAL,
    PERCENTAGE_TOLERANCE,
    MAX_LENGTHS,
    MAX_PRICE,
    MAX_QUANTITY,
)
