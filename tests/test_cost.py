import math

import pytest

from conftest import make_ingredient, make_packaging, make_recipe
from services import (
    InvalidQuantityError, UnknownUnitError, aggregate_packaging_cost,
    aggregate_recipe_cost, normalize_ingredient_cost, purchase_grams,
    require_positive_cost
)


# ============================================
# INGREDIENT COST NORMALIZER
# ============================================

def test_normalize_mass_purchase():
    # $25 for a 2 kg bag
    assert normalize_ingredient_cost(25, 2, 'kg') == pytest.approx(0.0125)


def test_normalize_volumetric_purchase_uses_density():
    cost = normalize_ingredient_cost(38.50, 1, 'gal', density=0.92)
    assert cost == pytest.approx(38.50 / (3785.41 * 0.92))


@pytest.mark.parametrize('price,qty,unit,density', [
    (25, 2, 'kg', 1.0),
    (12.99, 3, 'lb', 1.0),
    (4.2, 16, 'oz', 1.0),
    (38.5, 1, 'gal', 0.92),
    (9.75, 0.5, 'L', 1.03),
])
def test_normalize_round_trip_recovers_price(price, qty, unit, density):
    cost = normalize_ingredient_cost(price, qty, unit, density)
    assert cost * purchase_grams(qty, unit, density) == pytest.approx(price)


def test_normalize_rejects_zero_quantity():
    with pytest.raises(InvalidQuantityError):
        normalize_ingredient_cost(10, 0, 'kg')
    with pytest.raises(InvalidQuantityError):
        normalize_ingredient_cost(10, -1, 'kg')


def test_normalize_rejects_bad_price():
    with pytest.raises(InvalidQuantityError):
        normalize_ingredient_cost(-1, 1, 'kg')
    with pytest.raises(InvalidQuantityError):
        normalize_ingredient_cost(float('inf'), 1, 'kg')


def test_normalize_rejects_unknown_unit():
    with pytest.raises(UnknownUnitError):
        normalize_ingredient_cost(10, 1, 'bushel')


def test_zero_cost_rejected_before_storage():
    assert normalize_ingredient_cost(0, 1, 'kg') == 0
    with pytest.raises(InvalidQuantityError):
        require_positive_cost(0)


# ============================================
# RECIPE COST AGGREGATOR
# ============================================

def test_blend_of_two_halves():
    catalog = {1: make_ingredient(0.01), 2: make_ingredient(0.03)}
    recipe = make_recipe([(1, 50), (2, 50)], unit_size_g=100)

    cost = aggregate_recipe_cost(recipe, catalog)

    assert cost.cost_per_gram == pytest.approx(0.02)
    assert cost.unit_cost == pytest.approx(2.0)
    assert cost.total_percentage == pytest.approx(100)
    assert cost.is_complete
    assert cost.is_resolved


def test_product_weight_overrides_recipe_size():
    catalog = {1: make_ingredient(0.01)}
    recipe = make_recipe([(1, 100)], unit_size_g=1000)

    cost = aggregate_recipe_cost(recipe, catalog, unit_weight_g=250)

    assert cost.unit_weight_g == 250
    assert cost.unit_cost == pytest.approx(2.5)


def test_partial_formula_is_flagged_incomplete():
    catalog = {1: make_ingredient(0.0125), 2: make_ingredient(0.0082), 3: make_ingredient(0.01845)}
    recipe = make_recipe([(1, 45), (2, 25), (3, 10)], unit_size_g=500)

    cost = aggregate_recipe_cost(recipe, catalog)

    # 0.45*0.0125 + 0.25*0.0082 + 0.10*0.01845
    assert cost.cost_per_gram == pytest.approx(0.00952)
    assert cost.unit_cost == pytest.approx(4.76)
    assert cost.total_percentage == pytest.approx(80)
    assert not cost.is_complete


def test_unresolved_ingredient_contributes_zero():
    catalog = {1: make_ingredient(0.02)}
    recipe = make_recipe([(1, 60), (99, 40)], unit_size_g=100)

    cost = aggregate_recipe_cost(recipe, catalog)

    assert cost.cost_per_gram == pytest.approx(0.012)
    assert cost.unresolved_ids == [99]
    assert not cost.is_resolved
    assert cost.to_dict()['is_resolved'] is False


def test_zero_unit_weight_is_rejected():
    catalog = {1: make_ingredient(0.02)}
    recipe = make_recipe([(1, 100)], unit_size_g=0)
    with pytest.raises(InvalidQuantityError):
        aggregate_recipe_cost(recipe, catalog)


def test_percentage_over_100_is_rejected():
    recipe = make_recipe([(1, 120)])
    with pytest.raises(InvalidQuantityError):
        aggregate_recipe_cost(recipe, {1: make_ingredient(0.01)})


def test_empty_recipe_costs_nothing():
    cost = aggregate_recipe_cost(make_recipe([]), {})
    assert cost.cost_per_gram == 0
    assert cost.unit_cost == 0
    assert not math.isnan(cost.unit_cost)
    assert not cost.is_complete


# ============================================
# PACKAGING COST AGGREGATOR
# ============================================

def test_packaging_sums_filled_slots():
    catalog = {
        10: make_packaging(0.18),
        11: make_packaging(0.07, 'Closure'),
        12: make_packaging(0.05, 'Label'),
    }
    slots = {'container': 10, 'closure': 11, 'label': 12, 'box': None}

    cost = aggregate_packaging_cost(slots, catalog)

    assert cost.unit_cost == pytest.approx(0.30)
    assert cost.components == {'container': 0.18, 'closure': 0.07, 'label': 0.05}
    assert cost.is_resolved


def test_packaging_unresolved_slot():
    cost = aggregate_packaging_cost({'container': 10, 'box': 77}, {10: make_packaging(0.2)})
    assert cost.unit_cost == pytest.approx(0.2)
    assert cost.unresolved_ids == [77]


def test_packaging_empty_selection():
    cost = aggregate_packaging_cost({}, {})
    assert cost.unit_cost == 0
    assert cost.unresolved_ids == []


def test_packaging_unknown_slot():
    with pytest.raises(ValueError):
        aggregate_packaging_cost({'lid': 1}, {1: make_packaging(0.1)})
