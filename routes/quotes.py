"""
Quote Routes

Tiered wholesale quotes. Saving a quote again never edits it: the new
save becomes the next version of the same lineage.
"""

import html

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func, or_

from constants import MAX_LENGTHS, PACKAGING_SLOTS
from models import Product, Quote, Recipe, db
from services import (
    build_cost_basis, generate_tiered_quote, group_lineages, next_version, product_slot_ids
)
from utils import ValidationError, require_fields, optional_id, sanitize_text
from .helpers import (
    ingredient_catalog, json_body, packaging_catalog, parse_slots, parse_tiers,
    pricing_config, reference_warnings
)

quotes_blueprint = Blueprint('quotes', __name__)


def _quote_inputs(data):
    """
    Resolve the product, recipe, packaging and fill weight for a quote.

    A selected product supplies defaults; explicit recipe_id and slot ids in
    the request override them.
    """
    product = None
    product_id = optional_id(data.get('product_id'), 'product_id')
    if product_id is not None:
        product = db.session.get(Product, product_id)
        if product is None:
            raise ValidationError(f'Product {product_id} does not exist', field='product_id')

    defaults = product.to_dict() if product else {}
    merged = {**defaults, **{k: v for k, v in data.items() if v is not None}}

    recipe_id = optional_id(merged.get('recipe_id'), 'recipe_id')
    slots = parse_slots(merged)
    net_weight = product.net_weight_g if product else None
    return product, recipe_id, slots, net_weight


def _price(recipe_id, slots, net_weight, config, tiers):
    """Cost basis and tier results from the current catalogs."""
    recipe = db.session.get(Recipe, recipe_id) if recipe_id is not None else None
    packs = packaging_catalog()
    basis = build_cost_basis(recipe, ingredient_catalog(), slots, packs, unit_weight_g=net_weight)
    results = generate_tiered_quote(basis, config, tiers)

    unresolved = list(basis.unresolved_ids) if basis else []
    if recipe_id is not None and recipe is None:
        unresolved.insert(0, recipe_id)
    return basis, results, reference_warnings(unresolved)


def _priced_response(basis, config, tiers, results, warnings):
    return {
        'cost_basis': basis.to_dict() if basis else None,
        'pricing': config.to_dict(),
        'tiers': tiers,
        'results': [r.to_dict() for r in results],
        'warnings': warnings,
    }


@quotes_blueprint.route('/quotes/preview', methods=['POST'])
def quote_preview():
    """Price the three tiers without saving anything."""
    data = json_body()
    _, recipe_id, slots, net_weight = _quote_inputs(data)
    config = pricing_config(data)
    tiers = parse_tiers(data)
    basis, results, warnings = _price(recipe_id, slots, net_weight, config, tiers)
    return jsonify(_priced_response(basis, config, tiers, results, warnings))


@quotes_blueprint.route('/quotes')
def quotes_list():
    search = request.args.get('q', '').strip()
    query = Quote.query
    if search:
        query = query.filter(or_(Quote.client_name.ilike(f'%{search}%'),
                                 Quote.product_name.ilike(f'%{search}%')))

    lineages = []
    for versions in group_lineages(query.all()):
        latest = versions[0]
        lineages.append({
            'lineage_id': latest.lineage_id,
            'client_name': latest.client_name,
            'product_name': latest.product_name,
            'latest': latest.to_dict(),
            'versions': [
                {'id': q.id, 'version': q.version, 'version_label': q.version_label,
                 'selected_tier_price': q.selected_tier_price}
                for q in versions
            ],
        })
    return jsonify(lineages)


@quotes_blueprint.route('/quotes', methods=['POST'])
def quote_save():
    """Save a new quote, or the next version of the quote named in based_on."""
    data = json_body()

    previous = None
    based_on = optional_id(data.get('based_on'), 'based_on')
    if based_on is not None:
        previous = db.get_or_404(Quote, based_on)
        # Start from the loaded quote (stored text unescaped); the request overrides what it sends
        loaded = {**previous.to_dict(), 'client_name': html.unescape(previous.client_name)}
        new_product = optional_id(data.get('product_id'), 'product_id')
        if new_product is not None and new_product != previous.product_id:
            # A different product brings its own recipe and packaging
            for key in ('recipe_id',) + tuple(f'{slot}_id' for slot in PACKAGING_SLOTS):
                loaded.pop(key)
        else:
            # '' keeps a slot the quote left empty from being refilled by the product
            for slot in PACKAGING_SLOTS:
                if loaded[f'{slot}_id'] is None:
                    loaded[f'{slot}_id'] = ''
        data = {**loaded, **previous.pricing_params(),
                **dict(zip(('tier1_units', 'tier2_units', 'tier3_units'), previous.tiers)),
                **{k: v for k, v in data.items() if v is not None}}

    require_fields(data, 'client_name', 'product_id')
    product, recipe_id, slots, net_weight = _quote_inputs(data)
    if recipe_id is None:
        raise ValidationError('A recipe is required to price a quote', field='recipe_id')

    config = pricing_config(data)
    tiers = parse_tiers(data)
    basis, results, warnings = _price(recipe_id, slots, net_weight, config, tiers)
    if not results:
        raise ValidationError(f'Recipe {recipe_id} does not exist', field='recipe_id')

    if previous is not None:
        lineage_id = previous.lineage_id
        quote_number = previous.quote_number
        latest = db.session.query(func.max(Quote.version)).filter(Quote.lineage_id == lineage_id).scalar()
        version = next_version(latest)
    else:
        lineage_id = None
        # Numbered from the lineage id once the row exists
        quote_number = ''
        version = next_version(None)

    first = results[0]
    quote = Quote(
        lineage_id=lineage_id,
        version=version,
        quote_number=quote_number,
        client_name=sanitize_text(data['client_name'], max_length=MAX_LENGTHS['client']),
        product_id=product.id,
        product_name=product.name,
        product_sku=product.sku or 'N/A',
        net_weight_g=net_weight,
        recipe_id=recipe_id,
        tier1_units=tiers[0],
        tier2_units=tiers[1],
        tier3_units=tiers[2],
        selected_tier_units=tiers[0],
        selected_tier_price=first.recommended_price,
        selected_tier_total=first.total_price,
        **config.to_dict(),
        **{f'{slot}_id': item_id for slot, item_id in slots.items()}
    )
    db.session.add(quote)
    db.session.flush()
    if quote.lineage_id is None:
        quote.lineage_id = quote.id
        quote.quote_number = f'Q-{quote.lineage_id:04d}'
    db.session.commit()

    current_app.logger.info('Quote %s %s saved for %s', quote.quote_number, quote.version_label, quote.client_name)
    response = quote.to_dict()
    response.update(_priced_response(basis, config, tiers, results, warnings))
    return jsonify(response), 201


@quotes_blueprint.route('/quotes/<int:id>')
def quote_view(id):
    """Saved quote with its tiers re-priced from the current catalogs."""
    quote = db.get_or_404(Quote, id)
    config = pricing_config(quote.pricing_params())
    slots = product_slot_ids(quote)
    basis, results, warnings = _price(quote.recipe_id, slots, quote.net_weight_g, config, quote.tiers)

    response = quote.to_dict()
    response.update(_priced_response(basis, config, quote.tiers, results, warnings))
    return jsonify(response)
