"""
Product Routes

Product builder: one recipe, a packaging configuration and a fill weight.
"""

from flask import Blueprint, current_app, jsonify

from constants import MAX_LENGTHS, MAX_QUANTITY
from models import Product, Recipe, db
from services import aggregate_packaging_cost, aggregate_recipe_cost, product_slot_ids
from utils import require_fields, parse_float, parse_int, sanitize_text, sanitize_sku
from .helpers import (
    get_recipe, ingredient_catalog, json_body, packaging_catalog, parse_slots, reference_warnings
)

products_blueprint = Blueprint('products', __name__)


def _cost_breakdown(recipe, net_weight_g, slot_ids, packs):
    """Material and packaging cost of one unit, with unresolved references."""
    recipe_cost = aggregate_recipe_cost(recipe, ingredient_catalog(), net_weight_g)
    packaging_cost = aggregate_packaging_cost(slot_ids, packs)
    return {
        'material': recipe_cost.to_dict(),
        'packaging': packaging_cost.to_dict(),
        'total_material_cost': recipe_cost.unit_cost + packaging_cost.unit_cost,
        'warnings': reference_warnings(recipe_cost.unresolved_ids + packaging_cost.unresolved_ids),
    }


@products_blueprint.route('/products')
def products_list():
    products = Product.query.order_by(Product.name).all()
    return jsonify([p.to_dict() for p in products])


@products_blueprint.route('/products', methods=['POST'])
def product_add():
    data = json_body()
    require_fields(data, 'name', 'recipe_id', 'net_weight_g')

    recipe = get_recipe(parse_int(data['recipe_id'], 'recipe_id', min_val=1))
    net_weight = parse_float(data['net_weight_g'], 'net_weight_g', min_val=0, max_val=MAX_QUANTITY, exclusive_min=True)
    packs = packaging_catalog()
    slots = parse_slots(data, check_catalog=packs)

    costs = _cost_breakdown(recipe, net_weight, slots, packs)

    product = Product(
        name=sanitize_text(data['name'], max_length=MAX_LENGTHS['product_name']),
        sku=sanitize_sku(data.get('sku'), max_length=MAX_LENGTHS['sku']),
        net_weight_g=net_weight,
        recipe_id=recipe.id,
        recipe_name=recipe.name,
        total_material_cost=costs['total_material_cost'],
        **{f'{slot}_id': item_id for slot, item_id in slots.items()}
    )
    db.session.add(product)
    db.session.commit()
    current_app.logger.info('Product "%s" created at %.4f per unit', product.name, product.total_material_cost)
    return jsonify({**product.to_dict(), 'cost': costs}), 201


@products_blueprint.route('/products/<int:id>')
def product_view(id):
    """Product with its cost recomputed from the current catalogs."""
    product = db.get_or_404(Product, id)
    data = product.to_dict()

    recipe = db.session.get(Recipe, product.recipe_id)
    if recipe is None:
        data['cost'] = None
        data['warnings'] = reference_warnings([product.recipe_id])
        return jsonify(data)

    data['cost'] = _cost_breakdown(recipe, product.net_weight_g, product_slot_ids(product), packaging_catalog())
    data['warnings'] = data['cost']['warnings']
    return jsonify(data)
