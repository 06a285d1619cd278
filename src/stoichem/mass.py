"""Molar mass and percent composition."""

from __future__ import annotations

from stoichem.errors import InvalidFormulaSyntax, UnknownElement
from stoichem.formula import MAX_ATOMS, parse_formula
from stoichem.models import Formula, MassContribution, MolarMassResult
from stoichem.periodic_table import DEFAULT_TABLE, PeriodicTable


def _as_formula(formula: Formula | str, table: PeriodicTable) -> Formula:
    if isinstance(formula, Formula):
        return formula
    return parse_formula(formula, table)


def molar_mass(formula: Formula | str, table: PeriodicTable = DEFAULT_TABLE) -> MolarMassResult:
    """Sum ``count * atomic weight`` over the formula's elements.

    Args:
        formula: A parsed :class:`Formula` or formula text.
        table: Periodic table supplying the atomic weights.

    Returns:
        A :class:`MolarMassResult` whose contributions follow first-seen element order.
    """
    parsed = _as_formula(formula, table)

    total = 0.0
    contributions = []
    steps = []
    for element, count in parsed.counts.items():
        weight = table.get(element)
        if weight is None:
            raise UnknownElement(element)
        if count > MAX_ATOMS:
            raise InvalidFormulaSyntax(parsed.text, 0)
        mass = weight * count
        total += mass
        contributions.append(MassContribution(element, count, weight, mass))
        steps.append(f"{element}: {count} × {weight:.3f} g/mol = {mass:.3f} g/mol")

    return MolarMassResult(
        value=total,
        unit="g/mol",
        steps=tuple(steps),
        formula=parsed,
        contributions=tuple(contributions),
    )


def mass_percent(formula: Formula | str, table: PeriodicTable = DEFAULT_TABLE) -> dict[str, float]:
    """Percent by mass of each element, in first-seen order."""
    result = molar_mass(formula, table)
    return {
        part.element: part.contribution / result.total * 100.0
        for part in result.contributions
    }
