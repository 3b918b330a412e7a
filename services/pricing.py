"""
Pricing Service

Unit economics and tiered quote generation.

Price = COGS / (1 - margin%). Setup cost is a fixed amount per order spread
over the order quantity, so the per-unit price falls as the order grows.
"""

import logging
import math
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Sequence

from .cost import aggregate_recipe_cost, aggregate_packaging_cost, require_finite
from .errors import InvalidQuantityError, InvalidMarginError

logger = logging.getLogger(__name__)

# Representative small / medium / large order sizes
DEFAULT_TIERS = (1000, 5000, 10000)


@dataclass(frozen=True)
class PricingConfig:
    """Cost knobs for one pricing call. Amounts are per unit except setup_cost."""
    labor_rate: float
    overhead_rate: float
    setup_cost: float
    target_margin_pct: float

    def validate(self):
        """
        Check every knob and return a copy holding plain floats.

        Raises:
            InvalidQuantityError: negative or non-finite rate or setup cost
            InvalidMarginError: target margin outside [0, 100)
        """
        labor = require_finite(self.labor_rate, 'labor rate')
        overhead = require_finite(self.overhead_rate, 'overhead rate')
        setup = require_finite(self.setup_cost, 'setup cost')
        margin = self.target_margin_pct
        try:
            margin = float(margin)
        except (TypeError, ValueError):
            raise InvalidMarginError(f"target margin must be a number, got {margin!r}")
        if not math.isfinite(margin) or margin < 0 or margin >= 100:
            raise InvalidMarginError(f"target margin must be in [0, 100), got {margin:g}")
        return PricingConfig(labor, overhead, setup, margin)

    @classmethod
    def from_dict(cls, data, defaults=None):
        """Build a config from request data, filling gaps from defaults."""
        merged = dict(defaults or {})
        merged.update({k: v for k, v in (data or {}).items() if v is not None})
        try:
            return cls(
                labor_rate=merged['labor_rate'],
                overhead_rate=merged['overhead_rate'],
                setup_cost=merged['setup_cost'],
                target_margin_pct=merged['target_margin_pct'],
            )
        except KeyError as e:
            raise InvalidQuantityError(f"Missing pricing parameter: {e.args[0]}")

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class CostBasis:
    """Per-unit material and packaging cost a quote is priced from."""
    material_cost_per_unit: float
    packaging_cost_per_unit: float
    unresolved_ids: List = field(default_factory=list)
    is_complete: bool = True

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class QuoteResult:
    """Unit economics at one order quantity."""
    units: float
    material_cost_per_unit: float
    packaging_cost_per_unit: float
    labor_per_unit: float
    overhead_per_unit: float
    setup_per_unit: float
    total_cogs_per_unit: float
    total_cogs: float
    recommended_price: float
    profit_per_unit: float
    margin_pct: float
    total_price: float

    def to_dict(self):
        return asdict(self)


def build_cost_basis(recipe, ingredient_catalog, slot_ids=None, packaging_catalog=None, unit_weight_g=None):
    """
    Assemble the material + packaging cost of one unit.

    Returns None when no recipe is given: without a formula there is no
    cost basis to price.
    """
    if recipe is None:
        return None

    recipe_cost = aggregate_recipe_cost(recipe, ingredient_catalog, unit_weight_g)
    packaging_cost = aggregate_packaging_cost(slot_ids or {}, packaging_catalog or {})

    return CostBasis(
        material_cost_per_unit=recipe_cost.unit_cost,
        packaging_cost_per_unit=packaging_cost.unit_cost,
        unresolved_ids=recipe_cost.unresolved_ids + packaging_cost.unresolved_ids,
        is_complete=recipe_cost.is_complete,
    )


def compute_unit_economics(costs, config, quantity):
    """
    Price one order quantity.

    Args:
        costs: CostBasis with per-unit material and packaging cost
        config: PricingConfig
        quantity: Order quantity in units (> 0)

    Returns:
        QuoteResult

    Raises:
        InvalidQuantityError: quantity <= 0, or a negative/non-finite cost
        InvalidMarginError: target margin outside [0, 100)
    """
    config = config.validate()
    units = require_finite(quantity, 'order quantity', inclusive=False)
    material = require_finite(costs.material_cost_per_unit, 'material cost')
    packaging = require_finite(costs.packaging_cost_per_unit, 'packaging cost')
    labor = config.labor_rate
    overhead = config.overhead_rate
    margin = config.target_margin_pct

    setup_per_unit = config.setup_cost / units
    total_cogs_per_unit = material + packaging + labor + overhead + setup_per_unit
    recommended_price = total_cogs_per_unit / (1 - margin / 100)
    profit_per_unit = recommended_price - total_cogs_per_unit

    # Zero cost gives a zero price; report the target instead of 0/0
    if recommended_price > 0:
        realized_margin = profit_per_unit / recommended_price * 100
    else:
        realized_margin = margin

    result = QuoteResult(
        units=units,
        material_cost_per_unit=material,
        packaging_cost_per_unit=packaging,
        labor_per_unit=labor,
        overhead_per_unit=overhead,
        setup_per_unit=setup_per_unit,
        total_cogs_per_unit=total_cogs_per_unit,
        total_cogs=total_cogs_per_unit * units,
        recommended_price=recommended_price,
        profit_per_unit=profit_per_unit,
        margin_pct=realized_margin,
        total_price=recommended_price * units,
    )

    for name, value in result.to_dict().items():
        if not math.isfinite(value):
            raise InvalidQuantityError(f"{name} is not a finite number")

    logger.debug("Priced %s units at %.4f (COGS %.4f)", units, recommended_price, total_cogs_per_unit)
    return result


def generate_tiered_quote(costs: Optional[CostBasis], config, tiers: Sequence = DEFAULT_TIERS):
    """
    Price several order quantities independently.

    Returns an empty list when there is no cost basis (no recipe selected).
    Any invalid tier fails the whole call.
    """
    if costs is None:
        return []
    if not tiers:
        raise InvalidQuantityError('At least one quote tier is required')

    return [compute_unit_economics(costs, config, qty) for qty in tiers]
