"""
Recipe Models

Contains the Recipe and RecipeIngredient models. A recipe is a list of
ingredient percentages; saved recipes are never modified, a revision is
a new Recipe in the same lineage.
"""

from .base import db
from .ingredient import utcnow
from services.batch import row_weight_kg
from services.versioning import recipe_version_label


class Recipe(db.Model):
    """Versioned formula with ingredient percentage rows."""
    id = db.Column(db.Integer, primary_key=True)
    # id of the first version; shared by every revision
    lineage_id = db.Column(db.Integer, index=True)
    version = db.Column(db.Integer, nullable=False, default=1)
    name = db.Column(db.String(200), nullable=False, index=True)
    client = db.Column(db.String(200), default='')
    project = db.Column(db.String(200), default='')
    status = db.Column(db.String(20), default='Draft')
    # Total batch mass in grams
    unit_size_g = db.Column(db.Float, nullable=False)
    batch_units = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    ingredients = db.relationship(
        'RecipeIngredient', backref='recipe', lazy=True,
        cascade='all, delete-orphan', order_by='RecipeIngredient.position'
    )

    @property
    def version_label(self):
        return recipe_version_label(self.version)

    def to_dict(self):
        return {
            'id': self.id,
            'lineage_id': self.lineage_id,
            'version': self.version,
            'version_label': self.version_label,
            'name': self.name,
            'client': self.client,
            'project': self.project,
            'status': self.status,
            'unit_size_g': self.unit_size_g,
            'batch_units': self.batch_units,
            'ingredients': [ri.to_dict() for ri in self.ingredients],
        }


class RecipeIngredient(db.Model):
    """
    One formula line. Only the percentage is stored; the weight is derived
    from the recipe's batch size.

    ingredient_id is a plain reference: a deleted ingredient leaves the line
    in place so costing can report it as unresolved.
    """
    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id'), nullable=False, index=True)
    ingredient_id = db.Column(db.Integer, nullable=False, index=True)
    percentage = db.Column(db.Float, nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)

    @property
    def weight_kg(self):
        return row_weight_kg(self.percentage, self.recipe.unit_size_g)

    def to_dict(self):
        return {
            'ingredient_id': self.ingredient_id,
            'percentage': self.percentage,
            'weight_kg': self.weight_kg,
        }
