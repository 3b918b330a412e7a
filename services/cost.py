"""
Cost Calculation Service

Functions for calculating ingredient, recipe and packaging costs.

All functions work on snapshots handed in by the caller: an ingredient
catalog maps id -> object with ``cost_per_gram``, a packaging catalog maps
id -> object with ``unit_price``. Nothing here touches the database.
"""

import logging
import math
from dataclasses import dataclass, field, asdict
from typing import Dict, List

from constants import PACKAGING_SLOTS, PERCENTAGE_TOTAL, PERCENTAGE_TOLERANCE
from .errors import InvalidQuantityError
from .units import purchase_grams

logger = logging.getLogger(__name__)


def require_finite(value, name, minimum=0.0, inclusive=True):
    """Return value as a float, raising InvalidQuantityError if it is out of range."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidQuantityError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidQuantityError(f"{name} must be finite")
    if inclusive and value < minimum:
        raise InvalidQuantityError(f"{name} must be >= {minimum:g}")
    if not inclusive and value <= minimum:
        raise InvalidQuantityError(f"{name} must be > {minimum:g}")
    return value


# ============================================
# INGREDIENT COST NORMALIZER
# ============================================

def normalize_ingredient_cost(price, quantity, unit, density=1.0):
    """
    Convert a bulk purchase into a cost per gram.

    Args:
        price: Total price paid for the lot (>= 0)
        quantity: Amount purchased in ``unit`` (> 0)
        unit: Purchase unit (g, kg, lb, oz, l, gal, ml, fl oz, unit)
        density: g/mL equivalent, only used for volumetric units

    Returns:
        Cost per gram as a float

    Raises:
        UnknownUnitError: If the unit is not recognized
        InvalidQuantityError: If price, quantity or density are invalid,
            or the lot converts to zero grams
    """
    price = require_finite(price, 'purchase price')
    quantity = require_finite(quantity, 'purchase quantity', inclusive=False)

    grams = purchase_grams(quantity, unit, density)
    if not math.isfinite(grams) or grams <= 0:
        raise InvalidQuantityError(f"Purchase of {quantity:g} {unit} does not convert to a positive weight")

    cost_per_gram = price / grams
    if not math.isfinite(cost_per_gram):
        raise InvalidQuantityError('Cost per gram is not a finite number')

    logger.debug("Normalized %s for %s %s -> %.6f/g", price, quantity, unit, cost_per_gram)
    return cost_per_gram


def require_positive_cost(cost_per_gram):
    """Reject a zero or non-finite cost per gram before it is stored."""
    return require_finite(cost_per_gram, 'cost per gram', inclusive=False)


# ============================================
# RECIPE COST AGGREGATOR
# ============================================

@dataclass(frozen=True)
class RecipeCost:
    """Blended formula cost, applied to one unit weight."""
    cost_per_gram: float
    unit_cost: float
    unit_weight_g: float
    total_percentage: float
    is_complete: bool
    unresolved_ids: List = field(default_factory=list)

    @property
    def is_resolved(self):
        return not self.unresolved_ids

    def to_dict(self):
        data = asdict(self)
        data['is_resolved'] = self.is_resolved
        return data


def completeness(total_percentage):
    """True when a formula's percentages add up to 100."""
    return abs(total_percentage - PERCENTAGE_TOTAL) < PERCENTAGE_TOLERANCE


def blend_cost_per_gram(rows, ingredient_catalog):
    """
    Weighted average cost per gram across a formula.

    Returns (cost_per_gram, total_percentage, unresolved_ids). Rows whose
    ingredient is missing from the catalog contribute zero and are listed
    in unresolved_ids.
    """
    blended = 0.0
    total_pct = 0.0
    unresolved = []

    for row in rows:
        pct = require_finite(row.percentage, 'percentage')
        if pct > PERCENTAGE_TOTAL:
            raise InvalidQuantityError(f"percentage must be <= 100, got {pct:g}")
        total_pct += pct

        ing = ingredient_catalog.get(row.ingredient_id)
        if ing is None:
            if row.ingredient_id not in unresolved:
                unresolved.append(row.ingredient_id)
            continue

        cost = require_finite(ing.cost_per_gram, f"cost per gram of ingredient {row.ingredient_id}")
        blended += (pct / 100) * cost

    if unresolved:
        logger.warning("Unresolved ingredient references: %s", unresolved)

    return blended, total_pct, unresolved


def aggregate_recipe_cost(recipe, ingredient_catalog, unit_weight_g=None):
    """
    Calculate the blended cost of a recipe and its cost for one unit.

    A recipe defines a cost rate; the unit weight applies it. When costing a
    product pass its net weight, otherwise the recipe's own unit_size_g is used.

    Args:
        recipe: Object with ``ingredients`` rows and ``unit_size_g``
        ingredient_catalog: Mapping of ingredient id -> ingredient
        unit_weight_g: Fill weight in grams, overrides recipe.unit_size_g

    Returns:
        RecipeCost
    """
    weight = unit_weight_g if unit_weight_g else recipe.unit_size_g
    weight = require_finite(weight, 'unit weight', inclusive=False)

    cost_per_gram, total_pct, unresolved = blend_cost_per_gram(recipe.ingredients, ingredient_catalog)

    return RecipeCost(
        cost_per_gram=cost_per_gram,
        unit_cost=cost_per_gram * weight,
        unit_weight_g=weight,
        total_percentage=total_pct,
        is_complete=completeness(total_pct),
        unresolved_ids=unresolved,
    )


# ============================================
# PACKAGING COST AGGREGATOR
# ============================================

@dataclass(frozen=True)
class PackagingCost:
    """Per-unit packaging cost with the price of each filled slot."""
    unit_cost: float
    components: Dict[str, float] = field(default_factory=dict)
    unresolved_ids: List = field(default_factory=list)

    @property
    def is_resolved(self):
        return not self.unresolved_ids

    def to_dict(self):
        data = asdict(self)
        data['is_resolved'] = self.is_resolved
        return data


def aggregate_packaging_cost(slot_ids, packaging_catalog):
    """
    Sum the unit prices of the packaging chosen for a product.

    Args:
        slot_ids: Mapping of slot name (container/closure/label/box) -> item id.
            Empty slots (None or '') are skipped.
        packaging_catalog: Mapping of packaging id -> packaging item

    Returns:
        PackagingCost
    """
    total = 0.0
    components = {}
    unresolved = []

    for slot, item_id in (slot_ids or {}).items():
        if slot not in PACKAGING_SLOTS:
            raise ValueError(f"Unknown packaging slot: {slot}")
        if item_id in (None, ''):
            continue

        item = packaging_catalog.get(item_id)
        if item is None:
            unresolved.append(item_id)
            continue

        price = require_finite(item.unit_price, f"unit price of packaging {item_id}")
        components[slot] = price
        total += price

    if unresolved:
        logger.warning("Unresolved packaging references: %s", unresolved)

    return PackagingCost(unit_cost=total, components=components, unresolved_ids=unresolved)


def product_slot_ids(product):
    """Read the packaging slot ids off a product-like object."""
    return {slot: getattr(product, f'{slot}_id', None) for slot in PACKAGING_SLOTS}

