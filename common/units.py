import pint

ureg = pint.UnitRegistry()
Q_ = ureg.Quantity

DimensionalityError = pint.DimensionalityError


def measured(value: float, error: float, unit: str):
    """Quantity with a symmetric uncertainty (needs the `uncertainties` package)."""
    return Q_(value, unit).plus_minus(error)
