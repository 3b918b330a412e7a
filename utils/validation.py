"""
Request Validation Module

Parses numbers, ids and choices out of JSON request bodies. Interactive
entry is rejected with a ValidationError instead of being silently clamped
or defaulted.
"""

import math


class ValidationError(ValueError):
    """Raised when a request field is missing or invalid."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field

    def to_dict(self):
        data = {'error': 'ValidationError', 'message': str(self)}
        if self.field:
            data['field'] = self.field
        return data


def require_fields(data, *fields):
    """Raise if any field is absent or blank."""
    for name in fields:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f'{name} is required', field=name)


def parse_float(value, field, min_val=None, max_val=None, exclusive_min=False):
    """
    Parse a float value with optional bounds.

    Args:
        value: Raw value from the request
        field: Field name used in the error message
        min_val: Lower bound (inclusive unless exclusive_min)
        max_val: Upper bound (inclusive)

    Raises:
        ValidationError: If the value is not a finite number within bounds
    """
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number', field=field)
    try:
        result = float(value)
    except (ValueError, TypeError):
        raise ValidationError(f'{field} must be a number', field=field)
    if not math.isfinite(result):
        raise ValidationError(f'{field} must be finite', field=field)
    if min_val is not None:
        if exclusive_min and result <= min_val:
            raise ValidationError(f'{field} must be greater than {min_val:g}', field=field)
        if not exclusive_min and result < min_val:
            raise ValidationError(f'{field} must be at least {min_val:g}', field=field)
    if max_val is not None and result > max_val:
        raise ValidationError(f'{field} must be at most {max_val:g}', field=field)
    return result


def parse_int(value, field, min_val=None, max_val=None):
    """Parse a whole number with optional inclusive bounds."""
    result = parse_float(value, field, min_val=min_val, max_val=max_val)
    if result != int(result):
        raise ValidationError(f'{field} must be a whole number', field=field)
    return int(result)


def optional_float(data, field, **bounds):
    """parse_float for a field that may be absent or blank."""
    value = data.get(field)
    if value is None or value == '':
        return None
    return parse_float(value, field, **bounds)


def optional_id(value, field):
    """Parse an optional reference id; blank means 'not selected'."""
    if value is None or value == '':
        return None
    return parse_int(value, field, min_val=1)


def require_choice(value, field, choices):
    """Validate value against a whitelist."""
    if value not in choices:
        allowed = ', '.join(sorted(choices))
        raise ValidationError(f'Invalid {field}: {value!r} (expected one of {allowed})', field=field)
    return value
