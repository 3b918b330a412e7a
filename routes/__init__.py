"""
Routes Package

JSON blueprints for the costing app and the error handlers that turn
validation and costing errors into 400 responses.
"""

from flask import jsonify
from sqlalchemy.exc import IntegrityError

from models import db
from services import CostingError
from utils import ValidationError

from .dashboard import dashboard_blueprint
from .ingredients import ingredients_blueprint
from .packaging import packaging_blueprint
from .recipes import recipes_blueprint
from .products import products_blueprint
from .quotes import quotes_blueprint

BLUEPRINTS = [
    dashboard_blueprint,
    ingredients_blueprint,
    packaging_blueprint,
    recipes_blueprint,
    products_blueprint,
    quotes_blueprint,
]


def register_routes(app):
    """Attach every blueprint and the JSON error handlers to the app."""
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        app.logger.info('Rejected request: %s', error)
        return jsonify(error.to_dict()), 400

    @app.errorhandler(CostingError)
    def handle_costing_error(error):
        app.logger.info('Costing error (%s): %s', error.kind, error)
        return jsonify(error.to_dict()), 400

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'error': 'NotFound', 'message': 'Not found'}), 404

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        app.logger.warning('Integrity error: %s', error.orig)
        return jsonify({'error': 'IntegrityError', 'message': 'Failed to save'}), 400
