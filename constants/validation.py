"""
Validation Constants

Contains whitelist values and bounds for validating user input and
keeping stored costing data consistent.
"""

# Valid packaging categories (whitelist)
VALID_PACKAGING_CATEGORIES = {'Container', 'Closure', 'Label', 'Box', 'Other'}

# Packaging slots on a product and the categories each slot accepts
PACKAGING_SLOTS = ('container', 'closure', 'label', 'box')
SLOT_CATEGORIES = {
    'container': {'Container', 'Other'},
    'closure': {'Closure'},
    'label': {'Label'},
    'box': {'Box'},
}

# Valid recipe statuses
VALID_RECIPE_STATUSES = {'Draft', 'Approved', 'Archived'}

# A formula is considered complete when its percentages total 100 within this tolerance
PERCENTAGE_TOTAL = 100.0
PERCENTAGE_TOLERANCE = 0.1

# Maximum field lengths
MAX_LENGTHS = {
    'ingredient_name': 200,
    'vendor': 100,
    'location': 100,
    'packaging_name': 200,
    'recipe_name': 200,
    'client': 200,
    'project': 200,
    'product_name': 200,
    'sku': 50,
}

# Upper bounds for numeric entry
MAX_PRICE = 1_000_000
MAX_QUANTITY = 10_000_000
