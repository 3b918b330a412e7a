"""
Services Package

Costing and pricing logic. Every function here is pure: it works on the
snapshots it is given and never reads or writes the database.
"""

from .errors import (
    CostingError,
    UnknownUnitError,
    InvalidQuantityError,
    InvalidMarginError,
    UNRESOLVED_REFERENCE,
)

from .units import (
    standardize_unit,
    grams_per_unit,
    is_volumetric,
    purchase_grams,
)

from .cost import (
    RecipeCost,
    PackagingCost,
    normalize_ingredient_cost,
    require_positive_cost,
    aggregate_recipe_cost,
    aggregate_packaging_cost,
    product_slot_ids,
)

from .pricing import (
    DEFAULT_TIERS,
    PricingConfig,
    CostBasis,
    QuoteResult,
    build_cost_basis,
    compute_unit_economics,
    generate_tiered_quote,
)

from .batch import (
    BatchRow,
    BatchCost,
    batch_grams,
    row_weight_kg,
    percentage_from_weight,
    rescale_batch,
    batch_cost,
)

from .versioning import (
    next_version,
    recipe_version_label,
    quote_version_label,
    version_from_label,
    group_lineages,
)

__all__ = [
    # Errors
    'CostingError',
    'UnknownUnitError',
    'InvalidQuantityError',
    'InvalidMarginError',
    'UNRESOLVED_REFERENCE',
    # Units
    'standardize_unit',
    'grams_per_unit',
    'is_volumetric',
    'purchase_grams',
    # Cost
    'RecipeCost',
    'PackagingCost',
    'normalize_ingredient_cost',
    'require_positive_cost',
    'aggregate_recipe_cost',
    'aggregate_packaging_cost',
    'product_slot_ids',
    # Pricing
    'DEFAULT_TIERS',
    'PricingConfig',
    'CostBasis',
    'QuoteResult',
    'build_cost_basis',
    'compute_unit_economics',
    'generate_tiered_quote',
    # Batch
    'BatchRow',
    'BatchCost',
    'batch_grams',
    'row_weight_kg',
    'percentage_from_weight',
    'rescale_batch',
    'batch_cost',
    # Versioning
    'next_version',
    'recipe_version_label',
    'quote_version_label',
    'version_from_label',
    'group_lineages',
]
