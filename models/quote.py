"""
Quote Model

Saved tiered price quotes. Like recipes, quotes are versioned by adding a
new row to the lineage rather than editing the old one.
"""

from .base import db
from .ingredient import utcnow
from services.versioning import quote_version_label


class Quote(db.Model):
    """Quote inputs plus a tier-one snapshot for list views."""
    id = db.Column(db.Integer, primary_key=True)
    lineage_id = db.Column(db.Integer, index=True)
    version = db.Column(db.Integer, nullable=False, default=1)
    quote_number = db.Column(db.String(20), nullable=False, index=True)
    client_name = db.Column(db.String(200), nullable=False, index=True)

    # Product snapshot
    product_id = db.Column(db.Integer, nullable=True)
    product_name = db.Column(db.String(200), default='')
    product_sku = db.Column(db.String(50), default='')
    net_weight_g = db.Column(db.Float, nullable=True)

    recipe_id = db.Column(db.Integer, nullable=False)
    container_id = db.Column(db.Integer, nullable=True)
    closure_id = db.Column(db.Integer, nullable=True)
    label_id = db.Column(db.Integer, nullable=True)
    box_id = db.Column(db.Integer, nullable=True)

    # Pricing parameters
    labor_rate = db.Column(db.Float, nullable=False)
    overhead_rate = db.Column(db.Float, nullable=False)
    setup_cost = db.Column(db.Float, nullable=False)
    target_margin_pct = db.Column(db.Float, nullable=False)

    tier1_units = db.Column(db.Integer, nullable=False)
    tier2_units = db.Column(db.Integer, nullable=False)
    tier3_units = db.Column(db.Integer, nullable=False)

    selected_tier_units = db.Column(db.Integer, nullable=True)
    selected_tier_price = db.Column(db.Float, nullable=True)
    selected_tier_total = db.Column(db.Float, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow)

    @property
    def tiers(self):
        return [self.tier1_units, self.tier2_units, self.tier3_units]

    @property
    def version_label(self):
        return quote_version_label(self.version)

    def pricing_params(self):
        return {
            'labor_rate': self.labor_rate,
            'overhead_rate': self.overhead_rate,
            'setup_cost': self.setup_cost,
            'target_margin_pct': self.target_margin_pct,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'lineage_id': self.lineage_id,
            'version': self.version,
            'version_label': self.version_label,
            'quote_number': self.quote_number,
            'client_name': self.client_name,
            'product_id': self.product_id,
            'product_name': self.product_name,
            'product_sku': self.product_sku,
            'net_weight_g': self.net_weight_g,
            'recipe_id': self.recipe_id,
            'container_id': self.container_id,
            'closure_id': self.closure_id,
            'label_id': self.label_id,
            'box_id': self.box_id,
            'tiers': self.tiers,
            'pricing': self.pricing_params(),
            'selected_tier_units': self.selected_tier_units,
            'selected_tier_price': self.selected_tier_price,
            'selected_tier_total': self.selected_tier_total,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
