"""Limiting reactant and theoretical yield."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from stoichem.errors import EmptyInput, ProductNotInEquation, ReactantNotInEquation
from stoichem.mass import molar_mass
from stoichem.models import Equation, LimitingResult, ReactantYield
from stoichem.periodic_table import DEFAULT_TABLE, PeriodicTable
from stoichem.stoichiometry import (
    SpeciesAmount,
    Unit,
    as_equation,
    require_text,
    to_moles,
    validate_amount,
)


def resolve_limiting(
    equation: Equation | str,
    reactants: Sequence[SpeciesAmount],
    target_product: str,
    table: PeriodicTable = DEFAULT_TABLE,
) -> LimitingResult:
    """Find the reactant that permits the least ``target_product``.

    Each reactant's possible product is ``moles / c_reactant * c_product``. The
    smallest value wins; on an exact tie the reactant listed first is kept.

    Raises:
        EmptyInput: If the equation, the target or any reactant formula is blank,
            or no reactants are given.
        InvalidAmount: If any amount is not a positive number.
        ProductNotInEquation: If the target is not among the products.
        ReactantNotInEquation: If a reactant is not among the reactants.
    """
    if not isinstance(equation, Equation):
        require_text(equation, "Equation")
    product = require_text(target_product, "Target product formula")
    if not reactants:
        raise EmptyInput("Reactants", "At least one reactant is required.")

    entries = [
        (
            require_text(entry.formula, "Reactant formula"),
            validate_amount(entry.amount),
            Unit.parse(entry.unit),
        )
        for entry in reactants
    ]

    parsed = as_equation(equation, table)
    product_coefficients = parsed.product_coefficients()
    if product not in product_coefficients:
        raise ProductNotInEquation(product)
    product_coeff = product_coefficients[product]
    product_mass = molar_mass(parsed.formula(product), table).total

    reactant_coefficients = parsed.reactant_coefficients()
    steps = ["Calculating moles of product each reactant can produce:"]
    moles = []
    possible = []
    for formula, amount, unit in entries:
        if formula not in reactant_coefficients:
            raise ReactantNotInEquation(formula)
        coeff = reactant_coefficients[formula]
        reactant_formula = parsed.formula(formula)
        reactant_moles = to_moles(reactant_formula, amount, unit, table)

        if unit is Unit.GRAMS:
            reactant_mass = molar_mass(reactant_formula, table).total
            steps.append(
                f"  For {formula}: {amount:g}g / {reactant_mass:.3f} g/mol"
                f" = {reactant_moles:.4f} mol {formula}"
            )
        else:
            steps.append(f"  For {formula}: {reactant_moles:.4f} mol {formula} (given)")

        product_moles = (reactant_moles / coeff) * product_coeff
        steps.append(
            f"    Moles of {product} possible = ({reactant_moles:.4f} mol {formula}"
            f" / {coeff} mol {formula}) * {product_coeff} mol {product}"
            f" = {product_moles:.4f} mol {product}"
        )
        moles.append(reactant_moles)
        possible.append(product_moles)

    # argmin returns the first index among equal minima
    limiting_index = int(np.argmin(possible))
    limiting = entries[limiting_index][0]
    yield_moles = possible[limiting_index]
    yield_mass = yield_moles * product_mass

    consumed = np.array(
        [yield_moles / product_coeff * reactant_coefficients[formula] for formula, _, _ in entries]
    )
    excess = np.array(moles) - consumed
    excess[limiting_index] = 0.0
    candidates = tuple(
        ReactantYield(
            formula=formula,
            moles=moles[index],
            product_moles=possible[index],
            excess_moles=float(excess[index]),
        )
        for index, (formula, _, _) in enumerate(entries)
    )

    steps.append(
        f"Limiting reactant is {limiting} because it produces the least amount of"
        f" {product} ({yield_moles:.4f} moles)."
    )
    steps.append(
        f"Theoretical yield of {product} = {yield_moles:.4f} mol * {product_mass:.3f} g/mol"
        f" = {yield_mass:.3f} g."
    )

    return LimitingResult(
        value=yield_mass,
        unit=Unit.GRAMS.value,
        steps=tuple(steps),
        limiting_reactant=limiting,
        product=product,
        yield_moles=yield_moles,
        candidates=candidates,
    )
