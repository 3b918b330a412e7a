import pytest


def add_ingredient(client, name, price, size=1, uom='kg', **extra):
    response = client.post('/ingredients', json={
        'name': name, 'purchase_price': price, 'purchase_size': size, 'purchase_uom': uom, **extra
    })
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def add_packaging(client, name, price, category='Container'):
    response = client.post('/packaging', json={'name': name, 'unit_price': price, 'category': category})
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def add_recipe(client, rows, name='Body Butter', unit_size_g=100):
    response = client.post('/recipes', json={
        'name': name,
        'unit_size_g': unit_size_g,
        'ingredients': [{'ingredient_id': i, 'percentage': p} for i, p in rows],
    })
    assert response.status_code == 201, response.get_json()
    return response.get_json()


@pytest.fixture
def catalog(client):
    """Two ingredients, a jar and a 50/50 recipe."""
    shea = add_ingredient(client, 'Shea Butter', 10)
    cocoa = add_ingredient(client, 'Cocoa Butter', 30)
    jar = add_packaging(client, '8oz Jar', 0.30)
    recipe = add_recipe(client, [(shea['id'], 50), (cocoa['id'], 50)])
    return {'shea': shea, 'cocoa': cocoa, 'jar': jar, 'recipe': recipe}


@pytest.fixture
def product(client, catalog):
    response = client.post('/products', json={
        'name': 'Body Butter 8oz',
        'sku': 'bb 8oz',
        'recipe_id': catalog['recipe']['id'],
        'net_weight_g': 200,
        'container_id': catalog['jar']['id'],
    })
    assert response.status_code == 201, response.get_json()
    return response.get_json()


# ============================================
# DASHBOARD
# ============================================

def test_dashboard_counts(client, catalog):
    data = client.get('/').get_json()
    assert data['counts']['ingredients'] == 2
    assert data['counts']['recipes'] == 1
    assert data['recent_recipes'][0]['name'] == 'Body Butter'


# ============================================
# INGREDIENTS
# ============================================

def test_ingredient_cost_is_normalized(client):
    data = add_ingredient(client, 'Jojoba Oil', 38.5, size=1, uom='Gallon', density=0.86)
    assert data['purchase_uom'] == 'gal'
    assert data['cost_per_gram'] == pytest.approx(38.5 / (3785.41 * 0.86))


def test_normalize_preview_does_not_save(client):
    response = client.post('/ingredients/normalize', json={
        'purchase_price': 25, 'purchase_size': 2, 'purchase_uom': 'kg'
    })
    assert response.status_code == 200
    assert response.get_json()['cost_per_gram'] == pytest.approx(0.0125)
    assert client.get('/ingredients').get_json() == []


def test_ingredient_rejects_unknown_unit(client):
    response = client.post('/ingredients', json={
        'name': 'Beeswax', 'purchase_price': 10, 'purchase_size': 1, 'purchase_uom': 'bushel'
    })
    assert response.status_code == 400
    assert response.get_json()['error'] == 'UnknownUnit'


def test_ingredient_rejects_zero_price(client):
    response = client.post('/ingredients', json={
        'name': 'Water', 'purchase_price': 0, 'purchase_size': 1, 'purchase_uom': 'l'
    })
    assert response.status_code == 400
    assert response.get_json()['error'] == 'InvalidQuantity'


def test_ingredient_rejects_zero_size(client):
    response = client.post('/ingredients', json={
        'name': 'Water', 'purchase_price': 1, 'purchase_size': 0, 'purchase_uom': 'l'
    })
    assert response.status_code == 400
    assert response.get_json()['field'] == 'purchase_size'


def test_ingredient_names_are_unique(client):
    add_ingredient(client, 'Beeswax', 12)
    response = client.post('/ingredients', json={
        'name': 'beeswax', 'purchase_price': 10, 'purchase_size': 1, 'purchase_uom': 'kg'
    })
    assert response.status_code == 400
    assert response.get_json()['field'] == 'name'


def test_ingredient_edit_recomputes_cost(client):
    ing = add_ingredient(client, 'Beeswax', 12)
    response = client.put(f"/ingredients/{ing['id']}", json={
        'purchase_price': 20, 'purchase_size': 500, 'purchase_uom': 'g', 'location': 'Shelf B'
    })
    data = response.get_json()
    assert response.status_code == 200
    assert data['cost_per_gram'] == pytest.approx(0.04)
    assert data['location'] == 'Shelf B'


def test_ingredient_edit_keeps_stored_density(client):
    ing = add_ingredient(client, 'Glycerin', 38.5, uom='gal', density=0.92)
    response = client.put(f"/ingredients/{ing['id']}", json={
        'purchase_price': 40, 'purchase_size': 1, 'purchase_uom': 'gal'
    })
    data = response.get_json()
    assert response.status_code == 200
    assert data['density'] == pytest.approx(0.92)
    assert data['cost_per_gram'] == pytest.approx(40 / (3785.41 * 0.92))


def test_ingredient_density_change_recomputes_cost(client):
    ing = add_ingredient(client, 'Glycerin', 38.5, uom='gal', density=0.92)
    data = client.put(f"/ingredients/{ing['id']}", json={'density': 1.26}).get_json()
    assert data['density'] == pytest.approx(1.26)
    assert data['purchase_price'] == pytest.approx(38.5)
    assert data['cost_per_gram'] == pytest.approx(38.5 / (3785.41 * 1.26))


def test_ingredient_name_match_is_literal(client):
    add_ingredient(client, 'AXB', 12)
    data = add_ingredient(client, 'A_B', 12)
    assert data['name'] == 'A_B'
    assert len(client.get('/ingredients').get_json()) == 2


def test_ingredient_search_and_missing(client):
    add_ingredient(client, 'Beeswax', 12)
    add_ingredient(client, 'Shea Butter', 10)
    names = [i['name'] for i in client.get('/ingredients?q=shea').get_json()]
    assert names == ['Shea Butter']

    response = client.get('/ingredients/999')
    assert response.status_code == 404
    assert response.get_json()['error'] == 'NotFound'


def test_request_body_must_be_json(client):
    response = client.post('/ingredients', data='name=Beeswax')
    assert response.status_code == 400
    assert response.get_json()['error'] == 'ValidationError'


# ============================================
# PACKAGING
# ============================================

def test_packaging_filter_by_category(client):
    add_packaging(client, '8oz Jar', 0.30)
    add_packaging(client, 'Lid', 0.07, category='Closure')
    items = client.get('/packaging?category=Closure').get_json()
    assert [i['name'] for i in items] == ['Lid']


def test_packaging_rejects_unknown_category(client):
    response = client.post('/packaging', json={'name': 'Tube', 'unit_price': 0.5, 'category': 'Tube'})
    assert response.status_code == 400
    assert response.get_json()['field'] == 'category'


def test_packaging_edit_and_delete(client):
    item = add_packaging(client, 'Lid', 0.07, category='Closure')
    response = client.put(f"/packaging/{item['id']}", json={'unit_price': 0.09})
    assert response.get_json()['unit_price'] == pytest.approx(0.09)

    assert client.delete(f"/packaging/{item['id']}").status_code == 204
    assert client.get(f"/packaging/{item['id']}").status_code == 404


# ============================================
# RECIPES
# ============================================

def test_recipe_is_costed(client, catalog):
    recipe = catalog['recipe']
    assert recipe['version'] == 1
    assert recipe['version_label'] == 'v1.0'
    assert recipe['lineage_id'] == recipe['id']
    assert recipe['cost']['cost_per_gram'] == pytest.approx(0.02)
    assert recipe['cost']['unit_cost'] == pytest.approx(2.0)
    assert recipe['cost']['is_complete'] is True
    assert recipe['ingredients'][0]['weight_kg'] == pytest.approx(0.05)
    assert recipe['warnings'] == []


def test_recipe_rows_by_weight(client, catalog):
    response = client.post('/recipes', json={
        'name': 'Whipped Butter',
        'unit_weight_g': 100,
        'unit_count': 10,
        'ingredients': [
            {'ingredient_id': catalog['shea']['id'], 'weight_g': 750},
            {'ingredient_id': catalog['cocoa']['id'], 'weight_g': 250},
        ],
    })
    data = response.get_json()
    assert response.status_code == 201
    assert data['unit_size_g'] == pytest.approx(1000)
    assert data['batch_units'] == 10
    assert [row['percentage'] for row in data['ingredients']] == pytest.approx([75, 25])


def test_recipe_rejects_unknown_ingredient(client, catalog):
    response = client.post('/recipes', json={
        'name': 'Broken', 'unit_size_g': 100, 'ingredients': [{'ingredient_id': 999, 'percentage': 100}]
    })
    assert response.status_code == 400
    assert response.get_json()['field'] == 'ingredients[0].ingredient_id'


def test_partial_recipe_is_saved_as_incomplete(client, catalog):
    recipe = add_recipe(client, [(catalog['shea']['id'], 60)], name='Draft')
    assert recipe['cost']['is_complete'] is False
    assert recipe['cost']['total_percentage'] == pytest.approx(60)


def test_revise_creates_next_version(client, catalog):
    original = catalog['recipe']
    response = client.post(f"/recipes/{original['id']}/revise", json={
        'ingredients': [
            {'ingredient_id': catalog['shea']['id'], 'percentage': 70},
            {'ingredient_id': catalog['cocoa']['id'], 'percentage': 30},
        ],
        'status': 'Approved',
    })
    revised = response.get_json()

    assert response.status_code == 201
    assert revised['id'] != original['id']
    assert revised['lineage_id'] == original['lineage_id']
    assert revised['version_label'] == 'v1.1'
    assert revised['status'] == 'Approved'
    assert revised['cost']['cost_per_gram'] == pytest.approx(0.016)

    # The original is untouched
    assert client.get(f"/recipes/{original['id']}").get_json()['cost']['cost_per_gram'] == pytest.approx(0.02)

    lineages = client.get('/recipes').get_json()
    assert len(lineages) == 1
    assert [v['version_label'] for v in lineages[0]['versions']] == ['v1.1', 'v1.0']


def test_revising_an_old_version_continues_the_lineage(client, catalog):
    original = catalog['recipe']
    client.post(f"/recipes/{original['id']}/revise", json={})
    response = client.post(f"/recipes/{original['id']}/revise", json={'name': 'Body Butter & Co'})
    data = response.get_json()
    assert data['version'] == 3
    assert data['name'] == 'Body Butter &amp; Co'


def test_deleted_ingredient_is_reported_unresolved(client, catalog):
    cocoa_id = catalog['cocoa']['id']
    assert client.delete(f'/ingredients/{cocoa_id}').status_code == 204

    data = client.get(f"/recipes/{catalog['recipe']['id']}").get_json()
    assert data['cost']['cost_per_gram'] == pytest.approx(0.005)
    assert data['cost']['unresolved_ids'] == [cocoa_id]
    assert data['warnings'] == [{'kind': 'UnresolvedReference', 'ids': [cocoa_id]}]


def test_rescale_saved_recipe(client, catalog):
    response = client.post('/recipes/rescale', json={
        'recipe_id': catalog['recipe']['id'], 'unit_weight_g': 250, 'unit_count': 4
    })
    data = response.get_json()
    assert data['batch_grams'] == pytest.approx(1000)
    assert [row['weight_kg'] for row in data['ingredients']] == pytest.approx([0.5, 0.5])
    assert [row['percentage'] for row in data['ingredients']] == [50, 50]


def test_rescale_rejects_zero_count(client):
    response = client.post('/recipes/rescale', json={
        'unit_weight_g': 250, 'unit_count': 0, 'ingredients': [{'ingredient_id': 1, 'percentage': 100}]
    })
    assert response.status_code == 400


def test_rescale_rejects_non_object_rows(client):
    response = client.post('/recipes/rescale', json={
        'unit_weight_g': 250, 'unit_count': 4, 'ingredients': [50, 50]
    })
    assert response.status_code == 400
    assert response.get_json()['field'] == 'ingredients'


# ============================================
# PRODUCTS
# ============================================

def test_product_cost_breakdown(client, product):
    cost = product['cost']
    assert product['sku'] == 'BB-8OZ'
    assert cost['material']['unit_cost'] == pytest.approx(4.0)
    assert cost['packaging']['unit_cost'] == pytest.approx(0.30)
    assert product['total_material_cost'] == pytest.approx(4.30)

    viewed = client.get(f"/products/{product['id']}").get_json()
    assert viewed['cost']['total_material_cost'] == pytest.approx(4.30)
    assert viewed['warnings'] == []


def test_product_slot_must_match_category(client, catalog):
    response = client.post('/products', json={
        'name': 'Wrong Label',
        'recipe_id': catalog['recipe']['id'],
        'net_weight_g': 200,
        'label_id': catalog['jar']['id'],
    })
    assert response.status_code == 400
    assert response.get_json()['field'] == 'label_id'


def test_product_requires_existing_recipe(client, catalog):
    response = client.post('/products', json={'name': 'Orphan', 'recipe_id': 999, 'net_weight_g': 100})
    assert response.status_code == 400
    assert response.get_json()['field'] == 'recipe_id'


# ============================================
# QUOTES
# ============================================

def test_quote_preview_tiers(client, product):
    response = client.post('/quotes/preview', json={'product_id': product['id']})
    data = response.get_json()

    assert response.status_code == 200
    assert data['tiers'] == [1000, 5000, 10000]
    first = data['results'][0]
    assert first['total_cogs_per_unit'] == pytest.approx(5.0)
    assert first['recommended_price'] == pytest.approx(5.0 / 0.6)
    prices = [r['recommended_price'] for r in data['results']]
    assert prices == sorted(prices, reverse=True)


def test_quote_preview_without_recipe_is_empty(client):
    data = client.post('/quotes/preview', json={}).get_json()
    assert data['results'] == []
    assert data['cost_basis'] is None


def test_quote_preview_rejects_full_margin(client, product):
    response = client.post('/quotes/preview', json={'product_id': product['id'], 'target_margin_pct': 100})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'InvalidMargin'


def test_quote_preview_rejects_zero_tier(client, product):
    response = client.post('/quotes/preview', json={'product_id': product['id'], 'tier2_units': 0})
    assert response.status_code == 400
    assert response.get_json()['field'] == 'tier2_units'


def test_save_and_revise_quote(client, product):
    response = client.post('/quotes', json={
        'client_name': 'Acme Spa', 'product_id': product['id'], 'tier1_units': 500
    })
    first = response.get_json()
    assert response.status_code == 201
    assert first['version_label'] == 'v1'
    assert first['quote_number'].startswith('Q-')
    assert first['tiers'] == [500, 5000, 10000]
    assert first['selected_tier_price'] == pytest.approx(first['results'][0]['recommended_price'])

    response = client.post('/quotes', json={'based_on': first['id'], 'target_margin_pct': 50})
    second = response.get_json()
    assert response.status_code == 201
    assert second['version_label'] == 'v2'
    assert second['lineage_id'] == first['lineage_id']
    assert second['quote_number'] == first['quote_number']
    assert second['client_name'] == 'Acme Spa'
    assert second['tiers'] == [500, 5000, 10000]
    assert second['pricing']['target_margin_pct'] == 50

    lineages = client.get('/quotes?q=acme').get_json()
    assert len(lineages) == 1
    assert [v['version'] for v in lineages[0]['versions']] == [2, 1]


def test_quote_requires_client(client, product):
    response = client.post('/quotes', json={'product_id': product['id']})
    assert response.status_code == 400
    assert response.get_json()['field'] == 'client_name'


def test_saved_quote_reprices_from_current_catalog(client, catalog, product):
    saved = client.post('/quotes', json={'client_name': 'Acme Spa', 'product_id': product['id']}).get_json()
    client.put(f"/packaging/{catalog['jar']['id']}", json={'unit_price': 0.90})

    data = client.get(f"/quotes/{saved['id']}").get_json()
    assert data['cost_basis']['packaging_cost_per_unit'] == pytest.approx(0.90)
    assert data['selected_tier_price'] == pytest.approx(saved['selected_tier_price'])


def test_quote_numbers_follow_the_lineage(client, product):
    first = client.post('/quotes', json={'client_name': 'Acme Spa', 'product_id': product['id']}).get_json()
    second = client.post('/quotes', json={'client_name': 'Bloom Co', 'product_id': product['id']}).get_json()
    assert first['quote_number'] == f"Q-{first['lineage_id']:04d}"
    assert second['quote_number'] == f"Q-{second['lineage_id']:04d}"
    assert first['quote_number'] != second['quote_number']


def test_revision_with_new_product_uses_its_recipe_and_packaging(client, catalog, product):
    other_recipe = add_recipe(client, [(catalog['shea']['id'], 100)], name='Shea Balm')
    response = client.post('/products', json={
        'name': 'Shea Balm 2oz', 'recipe_id': other_recipe['id'], 'net_weight_g': 60
    })
    other_product = response.get_json()

    first = client.post('/quotes', json={'client_name': 'Acme Spa', 'product_id': product['id']}).get_json()
    response = client.post('/quotes', json={'based_on': first['id'], 'product_id': other_product['id']})
    second = response.get_json()

    assert response.status_code == 201
    assert second['version'] == 2
    assert second['product_name'] == 'Shea Balm 2oz'
    assert second['recipe_id'] == other_recipe['id']
    assert second['container_id'] is None
    # 100 % shea at 0.01 $/g over 60 g
    assert second['cost_basis']['material_cost_per_unit'] == pytest.approx(0.6)
    assert second['cost_basis']['packaging_cost_per_unit'] == 0


def test_revision_keeps_an_emptied_slot_empty(client, product):
    first = client.post('/quotes', json={
        'client_name': 'Acme Spa', 'product_id': product['id'], 'container_id': ''
    }).get_json()
    assert first['container_id'] is None

    second = client.post('/quotes', json={'based_on': first['id'], 'tier1_units': 2000}).get_json()
    assert second['container_id'] is None
    assert second['cost_basis']['packaging_cost_per_unit'] == 0
