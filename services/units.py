"""
Unit Conversion Service

Functions for turning a purchase quantity in any supported unit into grams.
"""

import logging
import math

from constants import UNIT_MAPPINGS, GRAMS_PER_UNIT, VOLUMETRIC_UNITS, FALLBACK_UNIT
from .errors import UnknownUnitError, InvalidQuantityError

logger = logging.getLogger(__name__)


def standardize_unit(unit):
    """Map user input like 'LBS' or 'Liter' to a standard unit key, or None."""
    if unit is None:
        return None
    key = ' '.join(str(unit).strip().lower().split())
    return UNIT_MAPPINGS.get(key)


def grams_per_unit(unit, tolerate_unknown=False):
    """
    Look up how many grams one purchase unit holds.

    Volumetric units return the water-equivalent factor; callers scale it
    by density (see purchase_grams).

    Args:
        unit: Unit string as entered (case and common aliases are accepted)
        tolerate_unknown: Fall back to 'unit' (factor 1) instead of failing.
            Only meant for bulk ingestion, never interactive entry.

    Raises:
        UnknownUnitError: If the unit is not recognized and not tolerated
    """
    std = standardize_unit(unit)
    if std is None:
        if not tolerate_unknown:
            raise UnknownUnitError(f"Unknown unit: '{unit}'")
        logger.warning("Unknown unit %r, treating as '%s'", unit, FALLBACK_UNIT)
        std = FALLBACK_UNIT
    return GRAMS_PER_UNIT[std]


def is_volumetric(unit):
    """True when the unit measures volume and needs a density."""
    return standardize_unit(unit) in VOLUMETRIC_UNITS


def purchase_grams(quantity, unit, density=1.0, tolerate_unknown=False):
    """Convert a purchase quantity to grams, applying density for volumetric units."""
    factor = grams_per_unit(unit, tolerate_unknown=tolerate_unknown)
    if is_volumetric(unit):
        if density is None or not math.isfinite(density) or density <= 0:
            raise InvalidQuantityError(f"Density must be a positive number for '{unit}'")
        factor *= density
    return quantity * factor
