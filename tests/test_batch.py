import pytest

from conftest import make_ingredient
from services import (
    BatchRow, InvalidQuantityError, batch_cost, batch_grams, percentage_from_weight,
    rescale_batch, row_weight_kg
)

ROWS = [BatchRow(1, 45.0), BatchRow(2, 25.0), BatchRow(3, 30.0)]


def test_batch_grams():
    assert batch_grams(250, 400) == 100000
    with pytest.raises(InvalidQuantityError):
        batch_grams(0, 400)
    with pytest.raises(InvalidQuantityError):
        batch_grams(250, 0)


def test_rescale_preserves_percentages():
    scaled = rescale_batch(ROWS, 250, 400)
    batch_kg = 100.0

    assert [r.percentage for r in scaled] == [45.0, 25.0, 30.0]
    assert [r.weight_kg for r in scaled] == pytest.approx([45.0, 25.0, 30.0])
    for original, row in zip(ROWS, scaled):
        assert row.weight_kg / batch_kg == pytest.approx(original.percentage / 100)


def test_rescale_returns_new_rows():
    scaled = rescale_batch(ROWS, 10, 3)
    assert scaled is not ROWS
    assert ROWS[0].weight_kg == 0.0
    assert scaled[0].weight_kg == pytest.approx(0.0135)


def test_weight_and_percentage_conversions():
    assert row_weight_kg(20, 5000) == pytest.approx(1.0)
    assert percentage_from_weight(1000, 5000) == pytest.approx(20)
    with pytest.raises(InvalidQuantityError):
        percentage_from_weight(10, 0)


def test_batch_cost_totals():
    catalog = {1: make_ingredient(0.01), 2: make_ingredient(0.02), 3: make_ingredient(0.03)}

    cost = batch_cost(ROWS, catalog, 1000)

    # 450g * 0.01 + 250g * 0.02 + 300g * 0.03
    assert cost.total_cost == pytest.approx(18.5)
    assert cost.total_weight_g == pytest.approx(1000)
    assert cost.fill_pct == pytest.approx(100)
    assert cost.is_complete
    assert cost.unresolved_ids == []


def test_batch_cost_with_missing_ingredient():
    cost = batch_cost([BatchRow(1, 50.0), BatchRow(9, 25.0)], {1: make_ingredient(0.01)}, 2000)
    assert cost.total_cost == pytest.approx(10.0)
    assert cost.fill_pct == pytest.approx(75)
    assert not cost.is_complete
    assert cost.to_dict()['unresolved_ids'] == [9]
