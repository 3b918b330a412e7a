"""
Ingredient Routes

Inventory of raw ingredients. A bulk purchase (price, amount, unit,
density) is entered and the normalized cost per gram is stored.
"""

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func

from constants import MAX_LENGTHS, MAX_PRICE, MAX_QUANTITY
from models import Ingredient, db
from services import normalize_ingredient_cost, require_positive_cost, standardize_unit
from utils import (
    ValidationError, require_fields, parse_float, optional_float, sanitize_text
)
from .helpers import json_body

ingredients_blueprint = Blueprint('ingredients', __name__)


def _purchase_from(data, density=1.0):
    """
    Parse and normalize a bulk purchase; returns (fields, cost_per_gram).

    density is used when the request leaves it out (the stored value on edit).
    """
    require_fields(data, 'purchase_price', 'purchase_size', 'purchase_uom')
    price = parse_float(data['purchase_price'], 'purchase_price', min_val=0, max_val=MAX_PRICE)
    size = parse_float(data['purchase_size'], 'purchase_size', min_val=0, max_val=MAX_QUANTITY, exclusive_min=True)
    density = parse_float(data.get('density', density), 'density', min_val=0, exclusive_min=True)
    unit = data['purchase_uom']

    cost_per_gram = require_positive_cost(normalize_ingredient_cost(price, size, unit, density))
    fields = {
        'purchase_price': price,
        'purchase_size': size,
        'purchase_uom': standardize_unit(unit),
        'density': density,
    }
    return fields, cost_per_gram


def _check_unique_name(name, exclude_id=None):
    query = Ingredient.query.filter(func.lower(Ingredient.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Ingredient.id != exclude_id)
    if query.first():
        raise ValidationError(f'An ingredient named "{name}" already exists', field='name')


@ingredients_blueprint.route('/ingredients')
def ingredients_list():
    search = request.args.get('q', '').strip()
    query = Ingredient.query
    if search:
        query = query.filter(Ingredient.name.ilike(f'%{search}%'))
    ingredients = query.order_by(Ingredient.name).all()
    return jsonify([ing.to_dict() for ing in ingredients])


@ingredients_blueprint.route('/ingredients/normalize', methods=['POST'])
def ingredient_normalize():
    """Preview the cost per gram of a bulk purchase without saving."""
    data = json_body()
    fields, cost_per_gram = _purchase_from(data)
    return jsonify({**fields, 'cost_per_gram': cost_per_gram})


@ingredients_blueprint.route('/ingredients', methods=['POST'])
def ingredient_add():
    data = json_body()
    require_fields(data, 'name')
    name = sanitize_text(data['name'], max_length=MAX_LENGTHS['ingredient_name'])
    _check_unique_name(name)

    fields, cost_per_gram = _purchase_from(data)

    ingredient = Ingredient(
        name=name,
        vendor=sanitize_text(data.get('vendor'), max_length=MAX_LENGTHS['vendor']) or 'Unknown',
        cost_per_gram=cost_per_gram,
        stock_level=optional_float(data, 'stock_level', min_val=0),
        location=sanitize_text(data.get('location'), max_length=MAX_LENGTHS['location']) or None,
        **fields
    )
    db.session.add(ingredient)
    db.session.commit()
    current_app.logger.info('Ingredient "%s" added at %.6f/g', ingredient.name, ingredient.cost_per_gram)
    return jsonify(ingredient.to_dict()), 201


@ingredients_blueprint.route('/ingredients/<int:id>')
def ingredient_view(id):
    ingredient = db.get_or_404(Ingredient, id)
    return jsonify(ingredient.to_dict())


@ingredients_blueprint.route('/ingredients/<int:id>', methods=['PUT'])
def ingredient_edit(id):
    ingredient = db.get_or_404(Ingredient, id)
    data = json_body()

    if 'name' in data:
        require_fields(data, 'name')
        name = sanitize_text(data['name'], max_length=MAX_LENGTHS['ingredient_name'])
        if name.lower() != ingredient.name.lower():
            _check_unique_name(name, exclude_id=id)
        ingredient.name = name

    if 'vendor' in data:
        ingredient.vendor = sanitize_text(data['vendor'], max_length=MAX_LENGTHS['vendor']) or 'Unknown'
    if 'location' in data:
        ingredient.location = sanitize_text(data['location'], max_length=MAX_LENGTHS['location']) or None
    if 'stock_level' in data:
        ingredient.stock_level = optional_float(data, 'stock_level', min_val=0)

    # Any purchase change recomputes the cost; fields left out keep their stored values
    purchase_keys = ('purchase_price', 'purchase_size', 'purchase_uom', 'density')
    if any(key in data for key in purchase_keys):
        purchase = {key: getattr(ingredient, key) for key in purchase_keys}
        purchase.update({key: data[key] for key in purchase_keys if key in data})
        fields, cost_per_gram = _purchase_from(purchase, density=ingredient.density)
        for key, value in fields.items():
            setattr(ingredient, key, value)
        ingredient.cost_per_gram = cost_per_gram

    db.session.commit()
    current_app.logger.info('Ingredient "%s" updated', ingredient.name)
    return jsonify(ingredient.to_dict())


@ingredients_blueprint.route('/ingredients/<int:id>', methods=['DELETE'])
def ingredient_delete(id):
    ingredient = db.get_or_404(Ingredient, id)
    name = ingredient.name

    # Recipe lines keep the id and report it as unresolved from now on
    db.session.delete(ingredient)
    db.session.commit()
    current_app.logger.info('Ingredient "%s" deleted', name)
    return '', 204
