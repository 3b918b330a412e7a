"""
Ingredient Model

Raw ingredients with the bulk purchase their cost per gram was derived from.
"""

from datetime import datetime, timezone

from .base import db


def utcnow():
    return datetime.now(timezone.utc)


class Ingredient(db.Model):
    """
    Raw ingredient in inventory.

    cost_per_gram is the canonical cost used by every calculation. It is
    only written from the bulk purchase fields via normalize_ingredient_cost,
    never entered directly.
    """
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False, index=True)
    vendor = db.Column(db.String(100), default='Unknown')

    # Bulk purchase the cost was derived from
    purchase_price = db.Column(db.Float, nullable=False, default=0.0)
    purchase_size = db.Column(db.Float, nullable=False, default=1.0)
    purchase_uom = db.Column(db.String(10), nullable=False, default='kg')
    density = db.Column(db.Float, nullable=False, default=1.0)

    # Cost per ONE gram
    cost_per_gram = db.Column(db.Float, nullable=False)

    # Inventory
    stock_level = db.Column(db.Float, nullable=True)
    location = db.Column(db.String(100), nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'vendor': self.vendor,
            'purchase_price': self.purchase_price,
            'purchase_size': self.purchase_size,
            'purchase_uom': self.purchase_uom,
            'density': self.density,
            'cost_per_gram': self.cost_per_gram,
            'stock_level': self.stock_level,
            'location': self.location,
        }
