"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .ingredient import Ingredient
from .packaging import PackagingItem
from .recipe import Recipe, RecipeIngredient
from .product import Product
from .quote import Quote

__all__ = [
    'db',
    'Ingredient',
    'PackagingItem',
    'Recipe',
    'RecipeIngredient',
    'Product',
    'Quote',
]
