"""
Packaging Routes

Catalog of containers, closures, labels and boxes.
"""

from flask import Blueprint, current_app, jsonify, request

from constants import MAX_LENGTHS, MAX_PRICE, VALID_PACKAGING_CATEGORIES
from models import PackagingItem, db
from utils import require_fields, parse_float, optional_float, require_choice, sanitize_text
from .helpers import json_body

packaging_blueprint = Blueprint('packaging', __name__)


@packaging_blueprint.route('/packaging')
def packaging_list():
    category = request.args.get('category', 'all')
    query = PackagingItem.query
    if category != 'all':
        query = query.filter_by(category=category)
    items = query.order_by(PackagingItem.category, PackagingItem.name).all()
    return jsonify([item.to_dict() for item in items])


@packaging_blueprint.route('/packaging', methods=['POST'])
def packaging_add():
    data = json_body()
    require_fields(data, 'name', 'unit_price')

    item = PackagingItem(
        name=sanitize_text(data['name'], max_length=MAX_LENGTHS['packaging_name']),
        category=require_choice(data.get('category', 'Other'), 'category', VALID_PACKAGING_CATEGORIES),
        vendor=sanitize_text(data.get('vendor'), max_length=MAX_LENGTHS['vendor']) or 'Unknown',
        unit_price=parse_float(data['unit_price'], 'unit_price', min_val=0, max_val=MAX_PRICE),
        stock_level=optional_float(data, 'stock_level', min_val=0),
    )
    db.session.add(item)
    db.session.commit()
    current_app.logger.info('Packaging "%s" (%s) added at %.4f', item.name, item.category, item.unit_price)
    return jsonify(item.to_dict()), 201


@packaging_blueprint.route('/packaging/<int:id>')
def packaging_view(id):
    item = db.get_or_404(PackagingItem, id)
    return jsonify(item.to_dict())


@packaging_blueprint.route('/packaging/<int:id>', methods=['PUT'])
def packaging_edit(id):
    item = db.get_or_404(PackagingItem, id)
    data = json_body()

    if 'name' in data:
        require_fields(data, 'name')
        item.name = sanitize_text(data['name'], max_length=MAX_LENGTHS['packaging_name'])
    if 'category' in data:
        item.category = require_choice(data['category'], 'category', VALID_PACKAGING_CATEGORIES)
    if 'vendor' in data:
        item.vendor = sanitize_text(data['vendor'], max_length=MAX_LENGTHS['vendor']) or 'Unknown'
    if 'unit_price' in data:
        item.unit_price = parse_float(data['unit_price'], 'unit_price', min_val=0, max_val=MAX_PRICE)
    if 'stock_level' in data:
        item.stock_level = optional_float(data, 'stock_level', min_val=0)

    db.session.commit()
    return jsonify(item.to_dict())


@packaging_blueprint.route('/packaging/<int:id>', methods=['DELETE'])
def packaging_delete(id):
    item = db.get_or_404(PackagingItem, id)
    db.session.delete(item)
    db.session.commit()
    current_app.logger.info('Packaging "%s" deleted', item.name)
    return '', 204
