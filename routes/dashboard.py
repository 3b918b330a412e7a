"""
Dashboard Route

Catalog counts and the most recently saved recipes.
"""

from flask import Blueprint, jsonify

from models import Ingredient, PackagingItem, Product, Quote, Recipe

dashboard_blueprint = Blueprint('dashboard', __name__)


@dashboard_blueprint.route('/')
def index():
    recent = Recipe.query.order_by(Recipe.created_at.desc(), Recipe.id.desc()).limit(3).all()
    return jsonify({
        'counts': {
            'ingredients': Ingredient.query.count(),
            'packaging': PackagingItem.query.count(),
            'recipes': Recipe.query.count(),
            'products': Product.query.count(),
            'quotes': Quote.query.count(),
        },
        'recent_recipes': [
            {'id': r.id, 'name': r.name, 'version_label': r.version_label,
             'status': r.status, 'unit_size_g': r.unit_size_g}
            for r in recent
        ],
    })
