from types import SimpleNamespace

import pytest

from app import create_app
from models import db


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_ingredient(cost_per_gram):
    return SimpleNamespace(cost_per_gram=cost_per_gram)


def make_recipe(rows, unit_size_g=500.0):
    """rows: [(ingredient_id, percentage), ...]"""
    return SimpleNamespace(
        unit_size_g=unit_size_g,
        ingredients=[SimpleNamespace(ingredient_id=i, percentage=p) for i, p in rows],
    )


def make_packaging(unit_price, category='Container'):
    return SimpleNamespace(unit_price=unit_price, category=category)
