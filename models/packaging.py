"""
Packaging Model

Containers, closures, labels and boxes a product can be assembled with.
"""

from .base import db
from .ingredient import utcnow


class PackagingItem(db.Model):
    """Packaging component priced per unit."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    category = db.Column(db.String(20), nullable=False, default='Other', index=True)
    vendor = db.Column(db.String(100), default='Unknown')
    unit_price = db.Column(db.Float, nullable=False, default=0.0)
    stock_level = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'vendor': self.vendor,
            'unit_price': self.unit_price,
            'stock_level': self.stock_level,
        }
