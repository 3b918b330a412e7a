"""
Batch Scaling Service

Percentages are the stored form of a formula; weights are always derived
from a batch size. These helpers re-express a formula at any batch size
and total up what a batch costs.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .cost import require_finite, completeness

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchRow:
    """One formula line at a specific batch size."""
    ingredient_id: object
    percentage: float
    weight_kg: float = 0.0

    def to_dict(self):
        return {
            'ingredient_id': self.ingredient_id,
            'percentage': self.percentage,
            'weight_kg': self.weight_kg,
        }


@dataclass(frozen=True)
class BatchCost:
    """Cost and fill of a whole batch."""
    batch_grams: float
    total_weight_g: float
    total_cost: float
    fill_pct: float
    is_complete: bool
    unresolved_ids: List = field(default_factory=list)

    def to_dict(self):
        return {
            'batch_grams': self.batch_grams,
            'total_weight_g': self.total_weight_g,
            'total_cost': self.total_cost,
            'fill_pct': self.fill_pct,
            'is_complete': self.is_complete,
            'unresolved_ids': list(self.unresolved_ids),
        }


def batch_grams(unit_weight_g, unit_count):
    """Total batch mass in grams for a unit fill weight and unit count."""
    weight = require_finite(unit_weight_g, 'unit weight', inclusive=False)
    count = require_finite(unit_count, 'unit count', inclusive=False)
    return weight * count


def row_weight_kg(percentage, total_grams):
    """Weight of one formula line in kg for a batch of total_grams."""
    return (percentage / 100) * (total_grams / 1000)


def percentage_from_weight(weight_g, total_grams):
    """Percentage of the batch a line weighing weight_g represents."""
    weight = require_finite(weight_g, 'ingredient weight')
    total = require_finite(total_grams, 'batch size', inclusive=False)
    return weight / total * 100


def rescale_batch(rows, unit_weight_g, unit_count):
    """
    Re-express a formula at a new batch size.

    Args:
        rows: Formula lines with ``ingredient_id`` and ``percentage``
        unit_weight_g: New fill weight per unit in grams
        unit_count: New number of units

    Returns:
        New list of BatchRow with weights recomputed and percentages unchanged
    """
    total = batch_grams(unit_weight_g, unit_count)
    scaled = [
        BatchRow(
            ingredient_id=row.ingredient_id,
            percentage=row.percentage,
            weight_kg=row_weight_kg(require_finite(row.percentage, 'percentage'), total),
        )
        for row in rows
    ]
    logger.debug("Rescaled %d rows to %.1f g", len(scaled), total)
    return scaled


def batch_cost(rows, ingredient_catalog, total_grams):
    """
    Cost of producing one whole batch of a formula.

    Lines whose ingredient is missing contribute their weight but no cost
    and are reported in unresolved_ids.
    """
    total = require_finite(total_grams, 'batch size', inclusive=False)
    weight_g = 0.0
    cost = 0.0
    pct_total = 0.0
    unresolved = []

    for row in rows:
        pct = require_finite(row.percentage, 'percentage')
        pct_total += pct
        line_g = row_weight_kg(pct, total) * 1000
        weight_g += line_g

        ing = ingredient_catalog.get(row.ingredient_id)
        if ing is None:
            unresolved.append(row.ingredient_id)
            continue
        cost += line_g * require_finite(ing.cost_per_gram, 'cost per gram')

    if unresolved:
        logger.warning("Unresolved ingredient references in batch: %s", unresolved)

    return BatchCost(
        batch_grams=total,
        total_weight_g=weight_g,
        total_cost=cost,
        fill_pct=weight_g / total * 100,
        is_complete=completeness(pct_total),
        unresolved_ids=unresolved,
    )
