"""
Unit Constants and Conversion Tables

Contains the purchase unit mappings and gram conversion factors used to
normalize bulk ingredient purchases into a cost per gram.
"""

# Unit mappings for purchase entry (lowercase input -> standard unit)
UNIT_MAPPINGS = {
    'gram': 'g', 'grams': 'g', 'g': 'g',
    'kilogram': 'kg', 'kilograms': 'kg', 'kg': 'kg', 'kgs': 'kg',
    'pound': 'lb', 'pounds': 'lb', 'lb': 'lb', 'lbs': 'lb',
    'ounce': 'oz', 'ounces': 'oz', 'oz': 'oz',
    'liter': 'l', 'liters': 'l', 'litre': 'l', 'litres': 'l', 'l': 'l',
    'gallon': 'gal', 'gallons': 'gal', 'gal': 'gal',
    'milliliter': 'ml', 'milliliters': 'ml', 'ml': 'ml',
    'fl oz': 'fl_oz', 'fl. oz': 'fl_oz', 'fluid ounce': 'fl_oz', 'fl_oz': 'fl_oz',
    'unit': 'unit', 'units': 'unit', 'each': 'unit', 'ea': 'unit',
}

# Grams per one purchase unit (volumetric units assume water, scale by density)
GRAMS_PER_UNIT = {
    'g': 1,
    'kg': 1000,
    'lb': 453.592,
    'oz': 28.3495,
    'l': 1000,
    'gal': 3785.41,
    'ml': 1,
    'fl_oz': 29.5735,
    'unit': 1,
}

# Units whose factor must be multiplied by the substance density
VOLUMETRIC_UNITS = {'l', 'gal', 'ml', 'fl_oz'}

# Mass units (density ignored)
MASS_UNITS = {'g', 'kg', 'lb', 'oz'}

# Fallback unit for tolerant ingestion of unrecognized input
FALLBACK_UNIT = 'unit'
