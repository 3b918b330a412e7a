"""
Recipe Routes

Formulas are saved as ingredient percentages. Saved recipes are immutable:
revising one creates the next version in the same lineage.
"""

import html

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func

from constants import MAX_LENGTHS, MAX_QUANTITY, VALID_RECIPE_STATUSES
from models import Recipe, RecipeIngredient, db
from services import (
    BatchRow, aggregate_recipe_cost, batch_cost, batch_grams, group_lineages,
    next_version, percentage_from_weight, rescale_batch
)
from utils import (
    ValidationError, require_fields, parse_float, parse_int, optional_id,
    require_choice, sanitize_text
)
from .helpers import ingredient_catalog, json_body, reference_warnings

recipes_blueprint = Blueprint('recipes', __name__)


def _batch_size(data, fallback=None):
    """
    Total batch grams from either unit_size_g or unit_weight_g x unit_count.
    """
    if data.get('unit_weight_g') not in (None, '') or data.get('unit_count') not in (None, ''):
        weight = parse_float(data.get('unit_weight_g'), 'unit_weight_g', min_val=0, exclusive_min=True)
        count = parse_int(data.get('unit_count'), 'unit_count', min_val=1)
        return batch_grams(weight, count), count
    if data.get('unit_size_g') not in (None, ''):
        size = parse_float(data['unit_size_g'], 'unit_size_g', min_val=0, max_val=MAX_QUANTITY, exclusive_min=True)
        return size, None
    if fallback is not None:
        return fallback, None
    raise ValidationError('unit_size_g or unit_weight_g and unit_count are required', field='unit_size_g')


def _parse_rows(raw_rows, total_grams, catalog):
    """
    Build formula rows from request data.

    Each row gives a percentage, or a weight in grams that is converted to a
    percentage of the batch.
    """
    if not isinstance(raw_rows, list) or not raw_rows:
        raise ValidationError('ingredients must be a non-empty list', field='ingredients')

    rows = []
    for index, raw in enumerate(raw_rows):
        if not isinstance(raw, dict):
            raise ValidationError('each ingredient row must be an object', field='ingredients')
        ingredient_id = optional_id(raw.get('ingredient_id'), f'ingredients[{index}].ingredient_id')
        if ingredient_id is None:
            raise ValidationError('ingredient_id is required', field=f'ingredients[{index}].ingredient_id')
        if ingredient_id not in catalog:
            raise ValidationError(f'Ingredient {ingredient_id} does not exist',
                                  field=f'ingredients[{index}].ingredient_id')

        if raw.get('percentage') not in (None, ''):
            pct = parse_float(raw['percentage'], f'ingredients[{index}].percentage', min_val=0, max_val=100)
        else:
            weight_g = parse_float(raw.get('weight_g'), f'ingredients[{index}].weight_g', min_val=0)
            pct = percentage_from_weight(weight_g, total_grams)
            if pct > 100:
                raise ValidationError('ingredient weight exceeds the batch size',
                                      field=f'ingredients[{index}].weight_g')
        rows.append(BatchRow(ingredient_id=ingredient_id, percentage=pct))
    return rows


def _save_recipe(data, rows, total_grams, batch_units, lineage_id=None, version=1):
    recipe = Recipe(
        lineage_id=lineage_id,
        version=version,
        name=sanitize_text(data['name'], max_length=MAX_LENGTHS['recipe_name']),
        client=sanitize_text(data.get('client'), max_length=MAX_LENGTHS['client']),
        project=sanitize_text(data.get('project'), max_length=MAX_LENGTHS['project']),
        status=require_choice(data.get('status', 'Draft'), 'status', VALID_RECIPE_STATUSES),
        unit_size_g=total_grams,
        batch_units=batch_units,
    )
    recipe.ingredients = [
        RecipeIngredient(ingredient_id=row.ingredient_id, percentage=row.percentage, position=position)
        for position, row in enumerate(rows)
    ]
    db.session.add(recipe)
    db.session.flush()
    if recipe.lineage_id is None:
        recipe.lineage_id = recipe.id
    db.session.commit()
    return recipe


def _costed(recipe, catalog):
    """Recipe plus its formula cost, batch cost and reference warnings."""
    cost = aggregate_recipe_cost(recipe, catalog)
    batch = batch_cost(recipe.ingredients, catalog, recipe.unit_size_g)
    data = recipe.to_dict()
    data['cost'] = cost.to_dict()
    data['batch'] = batch.to_dict()
    data['warnings'] = reference_warnings(cost.unresolved_ids)
    return data


@recipes_blueprint.route('/recipes')
def recipes_list():
    search = request.args.get('q', '').strip()
    query = Recipe.query
    if search:
        query = query.filter(Recipe.name.ilike(f'%{search}%'))

    lineages = []
    for versions in group_lineages(query.all()):
        latest = versions[0]
        lineages.append({
            'lineage_id': latest.lineage_id,
            'name': latest.name,
            'latest': latest.to_dict(),
            'versions': [
                {'id': r.id, 'version': r.version, 'version_label': r.version_label, 'status': r.status}
                for r in versions
            ],
        })
    return jsonify(lineages)


@recipes_blueprint.route('/recipes', methods=['POST'])
def recipe_add():
    data = json_body()
    require_fields(data, 'name')
    total_grams, count = _batch_size(data)
    batch_units = parse_int(data['batch_units'], 'batch_units', min_val=1) if data.get('batch_units') else count

    catalog = ingredient_catalog()
    rows = _parse_rows(data.get('ingredients'), total_grams, catalog)
    recipe = _save_recipe(data, rows, total_grams, batch_units)
    current_app.logger.info('Recipe "%s" %s created', recipe.name, recipe.version_label)
    return jsonify(_costed(recipe, catalog)), 201


@recipes_blueprint.route('/recipes/<int:id>')
def recipe_view(id):
    recipe = db.get_or_404(Recipe, id)
    return jsonify(_costed(recipe, ingredient_catalog()))


@recipes_blueprint.route('/recipes/<int:id>/revise', methods=['POST'])
def recipe_revise(id):
    """Save changes to a recipe as the next version of its lineage."""
    original = db.get_or_404(Recipe, id)
    data = json_body()

    # Stored text is already escaped; unescape so it is not escaped twice
    merged = {
        'name': html.unescape(original.name),
        'client': html.unescape(original.client or ''),
        'project': html.unescape(original.project or ''),
        'status': original.status,
    }
    merged.update({k: v for k, v in data.items() if k in merged and v is not None})
    require_fields(merged, 'name')

    total_grams, count = _batch_size(data, fallback=original.unit_size_g)
    batch_units = count or original.batch_units
    if data.get('batch_units'):
        batch_units = parse_int(data['batch_units'], 'batch_units', min_val=1)

    catalog = ingredient_catalog()
    if 'ingredients' in data:
        rows = _parse_rows(data['ingredients'], total_grams, catalog)
    else:
        rows = [BatchRow(ingredient_id=ri.ingredient_id, percentage=ri.percentage) for ri in original.ingredients]

    latest = db.session.query(func.max(Recipe.version)).filter(Recipe.lineage_id == original.lineage_id).scalar()
    recipe = _save_recipe(merged, rows, total_grams, batch_units,
                          lineage_id=original.lineage_id, version=next_version(latest))
    current_app.logger.info('Recipe "%s" revised to %s', recipe.name, recipe.version_label)
    return jsonify(_costed(recipe, catalog)), 201


@recipes_blueprint.route('/recipes/rescale', methods=['POST'])
def recipe_rescale():
    """Re-express a formula at a new unit weight and unit count."""
    data = json_body()
    require_fields(data, 'unit_weight_g', 'unit_count')
    unit_weight = parse_float(data['unit_weight_g'], 'unit_weight_g', min_val=0, exclusive_min=True)
    unit_count = parse_int(data['unit_count'], 'unit_count', min_val=1)

    if data.get('recipe_id') not in (None, ''):
        recipe = db.get_or_404(Recipe, parse_int(data['recipe_id'], 'recipe_id', min_val=1))
        rows = recipe.ingredients
    else:
        raw_rows = data.get('ingredients')
        if not isinstance(raw_rows, list):
            raise ValidationError('ingredients or recipe_id is required', field='ingredients')
        rows = []
        for index, raw in enumerate(raw_rows):
            if not isinstance(raw, dict):
                raise ValidationError('each ingredient row must be an object', field='ingredients')
            pct = parse_float(raw.get('percentage'), f'ingredients[{index}].percentage', min_val=0, max_val=100)
            rows.append(BatchRow(ingredient_id=raw.get('ingredient_id'), percentage=pct))

    scaled = rescale_batch(rows, unit_weight, unit_count)
    return jsonify({
        'batch_grams': batch_grams(unit_weight, unit_count),
        'ingredients': [row.to_dict() for row in scaled],
    })
