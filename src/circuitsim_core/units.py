# src/circuitsim_core/units.py
import logging
from typing import Union

import pint

logger = logging.getLogger(__name__)
# Offset units ("150 degC") are converted to kelvin when multiplied
ureg = pint.UnitRegistry(autoconvert_offset_to_baseunit=True)
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")


def to_magnitude(value: Union[int, float, str, "pint.Quantity"], target_unit: str) -> float:
    """
    Converts a user-supplied value to a plain float in `target_unit`.

    Bare numbers are taken to already be in the target unit. Strings are parsed
    by Pint ("1 kohm", "100 uF", "500 mA*h"); a dimensionless string such as
    "4.7" is accepted and treated like a bare number.

    Raises:
        pint.DimensionalityError: The value's dimension is incompatible with the target.
        pint.UndefinedUnitError: The string names a unit Pint does not know.
        ValueError: The value cannot be interpreted as a number at all.
    """
    if isinstance(value, bool):
        raise ValueError(f"Boolean '{value}' is not a physical quantity.")
    if isinstance(value, (int, float)):
        return float(value)

    qty = Quantity(value) if isinstance(value, str) else value
    if not isinstance(qty, Quantity):
        # Pint returns a plain number for strings like "4.7"
        return float(qty)
    if qty.dimensionless and not ureg.Unit(target_unit).dimensionless:
        return float(qty.magnitude)
    return float(qty.to(target_unit).magnitude)
