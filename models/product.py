"""
Product Model

A product bundles one recipe, a packaging configuration and a fill weight.
"""

from .base import db
from .ingredient import utcnow


class Product(db.Model):
    """Sellable unit a quote is built against."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    sku = db.Column(db.String(50), default='')
    net_weight_g = db.Column(db.Float, nullable=False)
    recipe_id = db.Column(db.Integer, nullable=False, index=True)
    recipe_name = db.Column(db.String(200), default='')

    # Packaging slots (each optional)
    container_id = db.Column(db.Integer, nullable=True)
    closure_id = db.Column(db.Integer, nullable=True)
    label_id = db.Column(db.Integer, nullable=True)
    box_id = db.Column(db.Integer, nullable=True)

    # Material + packaging per unit at the time the product was saved
    total_material_cost = db.Column(db.Float, default=0.0)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'sku': self.sku,
            'net_weight_g': self.net_weight_g,
            'recipe_id': self.recipe_id,
            'recipe_name': self.recipe_name,
            'container_id': self.container_id,
            'closure_id': self.closure_id,
            'label_id': self.label_id,
            'box_id': self.box_id,
            'total_material_cost': self.total_material_cost,
        }
