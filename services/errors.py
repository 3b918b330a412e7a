"""
Costing Errors

Exceptions raised by the costing engine. Every hard failure carries a
``kind`` string that the HTTP layer reports back to the caller.
"""


class CostingError(ValueError):
    """Base class for costing engine validation failures."""
    kind = 'CostingError'

    def to_dict(self):
        return {'error': self.kind, 'message': str(self)}


class UnknownUnitError(CostingError):
    """Raised when a unit string is not in the conversion table."""
    kind = 'UnknownUnit'


class InvalidQuantityError(CostingError):
    """Raised for zero, negative or non-finite quantities and amounts."""
    kind = 'InvalidQuantity'


class InvalidMarginError(CostingError):
    """Raised when a target margin is outside [0, 100)."""
    kind = 'InvalidMargin'


# Warning kind attached to otherwise successful results
UNRESOLVED_REFERENCE = 'UnresolvedReference'
