"""
Route Helpers

Snapshot loading and request parsing shared by the blueprints.
"""

from flask import current_app, request

from constants import PACKAGING_SLOTS, SLOT_CATEGORIES
from models import Ingredient, PackagingItem, Recipe, db
from services import PricingConfig, UNRESOLVED_REFERENCE
from utils import ValidationError, optional_id, parse_int


def json_body():
    """Return the request JSON object, or raise a ValidationError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def ingredient_catalog():
    """Snapshot of every ingredient keyed by id."""
    return {ing.id: ing for ing in Ingredient.query.all()}


def packaging_catalog():
    """Snapshot of every packaging item keyed by id."""
    return {item.id: item for item in PackagingItem.query.all()}


def get_recipe(recipe_id, field='recipe_id'):
    """Load a recipe by id or raise a ValidationError naming the field."""
    recipe = db.session.get(Recipe, recipe_id)
    if recipe is None:
        raise ValidationError(f'Recipe {recipe_id} does not exist', field=field)
    return recipe


def parse_slots(data, check_catalog=None):
    """
    Read container/closure/label/box ids from request data.

    With check_catalog, every selected id must exist and fit its slot.
    """
    slots = {}
    for slot in PACKAGING_SLOTS:
        item_id = optional_id(data.get(f'{slot}_id'), f'{slot}_id')
        if item_id is not None and check_catalog is not None:
            item = check_catalog.get(item_id)
            if item is None:
                raise ValidationError(f'Packaging item {item_id} does not exist', field=f'{slot}_id')
            if item.category not in SLOT_CATEGORIES[slot]:
                raise ValidationError(
                    f'{item.name} is a {item.category}, not allowed in the {slot} slot',
                    field=f'{slot}_id'
                )
        slots[slot] = item_id
    return slots


def parse_tiers(data):
    """Read tier1_units..tier3_units, falling back to configured defaults."""
    defaults = current_app.config['DEFAULT_QUOTE_TIERS']
    tiers = []
    for index, default in enumerate(defaults, start=1):
        field = f'tier{index}_units'
        value = data.get(field)
        tiers.append(default if value in (None, '') else parse_int(value, field, min_val=1))
    return tiers


def pricing_config(data):
    """Build a PricingConfig from request data and configured defaults."""
    return PricingConfig.from_dict(
        {key: data.get(key) for key in ('labor_rate', 'overhead_rate', 'setup_cost', 'target_margin_pct')},
        defaults=current_app.config['PRICING_DEFAULTS'],
    ).validate()


def reference_warnings(unresolved_ids):
    """Warning list for ids that did not resolve in the catalogs."""
    if not unresolved_ids:
        return []
    return [{'kind': UNRESOLVED_REFERENCE, 'ids': list(unresolved_ids)}]
