"""
Input Sanitization Module

Cleans free-text fields (names, vendors, SKUs) before they are stored.
"""

import html
import re

_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=200):
    """
    Sanitize a short text field for safe storage and display.

    Removes control characters, collapses whitespace, HTML-escapes special
    characters and truncates to max_length.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 200)

    Returns:
        Sanitized string ('' for None)
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = _CONTROL_CHARS.sub('', text)
    text = re.sub(r'\s+', ' ', text).strip()
    text = html.escape(text)

    if len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_sku(sku, max_length=50):
    """
    Normalize a SKU: uppercase letters, digits, dashes and underscores only.

    'slp 100-01' -> 'SLP-100-01'
    """
    if not sku:
        return ''

    sku = str(sku).strip().upper()
    sku = re.sub(r'\s+', '-', sku)
    sku = re.sub(r'[^A-Z0-9_-]', '', sku)
    return sku[:max_length]
