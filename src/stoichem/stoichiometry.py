"""Mole-ratio conversions between species of a balanced equation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from stoichem.equation import parse_equation
from stoichem.errors import EmptyInput, InvalidAmount, InvalidUnit, SpeciesNotInEquation
from stoichem.mass import molar_mass
from stoichem.models import CalculationResult, ConversionResult, Equation, Formula
from stoichem.periodic_table import DEFAULT_TABLE, PeriodicTable


class Unit(str, Enum):
    GRAMS = "g"
    MOLES = "mol"

    @classmethod
    def parse(cls, value: Unit | str) -> Unit:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidUnit(value) from None


@dataclass(frozen=True)
class SpeciesAmount:
    """A species in an equation with a known quantity.

    ``amount`` may still be raw user text; it is validated by the calculation
    that consumes it.
    """

    formula: str
    amount: Any
    unit: Unit | str = Unit.GRAMS


def require_text(value: str | None, field: str) -> str:
    if value is None or not str(value).strip():
        raise EmptyInput(field)
    return str(value).strip()


def validate_amount(amount: Any) -> float:
    """Return ``amount`` as a strictly positive finite float."""
    if amount is None or isinstance(amount, bool):
        raise InvalidAmount(amount)
    if isinstance(amount, str) and not amount.strip():
        raise InvalidAmount(amount)
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise InvalidAmount(amount) from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidAmount(amount)
    return value


def to_moles(
    formula: Formula | str,
    amount: float,
    unit: Unit | str,
    table: PeriodicTable = DEFAULT_TABLE,
) -> float:
    """Convert a validated amount to moles; grams go through the molar mass."""
    if Unit.parse(unit) is Unit.MOLES:
        return amount
    return amount / molar_mass(formula, table).total


def as_equation(equation: Equation | str, table: PeriodicTable) -> Equation:
    if isinstance(equation, Equation):
        return equation
    return parse_equation(equation, table)


def convert(
    equation: Equation | str,
    known: SpeciesAmount,
    target: str,
    table: PeriodicTable = DEFAULT_TABLE,
) -> ConversionResult:
    """Convert an amount of ``known`` into the equivalent mass of ``target``.

    The amount is validated before the equation is parsed, so bad input never
    reaches the arithmetic.

    Raises:
        EmptyInput: If the equation or either formula is blank.
        InvalidAmount: If the known amount is not a positive number.
        InvalidUnit: If the unit is neither ``g`` nor ``mol``.
        SpeciesNotInEquation: If either formula is absent from the equation.
    """
    if not isinstance(equation, Equation):
        require_text(equation, "Equation")
    known_formula = require_text(known.formula, "Known substance formula")
    target_formula = require_text(target, "Target substance formula")
    amount = validate_amount(known.amount)
    unit = Unit.parse(known.unit)

    parsed = as_equation(equation, table)
    coefficients = parsed.coefficients()
    if known_formula not in coefficients:
        raise SpeciesNotInEquation(known_formula)
    if target_formula not in coefficients:
        raise SpeciesNotInEquation(target_formula)

    known_coeff = coefficients[known_formula]
    target_coeff = coefficients[target_formula]
    known_parsed = parsed.formula(known_formula)
    known_mass = molar_mass(known_parsed, table).total
    target_mass = molar_mass(parsed.formula(target_formula), table).total

    known_moles = to_moles(known_parsed, amount, unit, table)
    steps = []
    if unit is Unit.GRAMS:
        steps.append(
            f"1. Moles of {known_formula} = {amount:g} g / {known_mass:.3f} g/mol"
            f" = {known_moles:.4f} mol"
        )
    else:
        steps.append(f"1. Moles of {known_formula} = {known_moles:.4f} mol (given)")

    target_moles = (known_moles / known_coeff) * target_coeff
    steps.append(
        f"2. Mole ratio: ({target_coeff} mol {target_formula} / {known_coeff} mol {known_formula})"
    )
    steps.append(
        f"   Moles of {target_formula} = {known_moles:.4f} mol {known_formula}"
        f" * ({target_coeff} / {known_coeff}) = {target_moles:.4f} mol"
    )

    mass = target_moles * target_mass
    steps.append(
        f"3. Mass of {target_formula} = {target_moles:.4f} mol * {target_mass:.3f} g/mol"
        f" = {mass:.3f} g"
    )

    return ConversionResult(
        value=mass,
        unit=Unit.GRAMS.value,
        steps=tuple(steps),
        known_moles=known_moles,
        moles=target_moles,
    )


def _as_number(value: Any, label: str) -> float:
    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        raise InvalidAmount(value, f"{label} must be a number.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidAmount(value, f"{label} must be a number.") from None
    if not math.isfinite(number):
        raise InvalidAmount(value, f"{label} must be a number.")
    return number


def percent_yield(actual: Any, theoretical: Any) -> CalculationResult:
    """Actual over theoretical yield, as a percentage."""
    actual_value = _as_number(actual, "Actual yield")
    theoretical_value = _as_number(theoretical, "Theoretical yield")
    if theoretical_value <= 0:
        raise InvalidAmount(theoretical, "Theoretical yield must be a positive number.")
    if actual_value < 0:
        raise InvalidAmount(actual, "Actual yield cannot be negative.")

    percent = actual_value / theoretical_value * 100.0
    step = (
        f"Percent yield = ({actual_value:g} g / {theoretical_value:g} g) × 100"
        f" = {percent:.2f} %"
    )
    return CalculationResult(value=percent, unit="%", steps=(step,))
