"""Balance verification for user-supplied equations.

Coefficients are never inferred; the checker only compares the
coefficient-weighted atom totals of the two sides.
"""

from __future__ import annotations

from stoichem.equation import parse_equation, parse_side
from stoichem.errors import EmptyInput
from stoichem.models import BalanceReport, ElementBalance, EquationSide
from stoichem.periodic_table import DEFAULT_TABLE, PeriodicTable


def _as_side(side: EquationSide | str, table: PeriodicTable) -> EquationSide:
    if isinstance(side, EquationSide):
        return side
    return parse_side(side, table)


def check_balance(
    reactants: EquationSide | str,
    products: EquationSide | str,
    table: PeriodicTable = DEFAULT_TABLE,
) -> BalanceReport:
    """Compare element tallies of ``reactants`` and ``products``.

    Raises:
        EmptyInput: If either side is blank or no elements were found at all.
    """
    reactant_side = _as_side(reactants, table)
    product_side = _as_side(products, table)

    reactant_tally = reactant_side.tally()
    product_tally = product_side.tally()
    elements = sorted(set(reactant_tally) | set(product_tally))
    if not elements:
        raise EmptyInput(
            "Equation",
            "Could not parse elements from the equation. Check formula syntax.",
        )

    tally = {
        element: ElementBalance(
            reactant=reactant_tally.get(element, 0),
            product=product_tally.get(element, 0),
        )
        for element in elements
    }
    balanced = all(counts.balanced for counts in tally.values())
    return BalanceReport(balanced=balanced, tally=tally)


def check_equation(text: str, table: PeriodicTable = DEFAULT_TABLE) -> BalanceReport:
    equation = parse_equation(text, table)
    return check_balance(equation.reactants, equation.products, table)
