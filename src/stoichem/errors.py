"""Error taxonomy for formula parsing and stoichiometric calculations.

Every failure raised by the engine derives from :class:`ChemistryError` and
carries a ``kind`` tag plus the context (symbol, position, term or formula)
needed to render a precise message.
"""

from __future__ import annotations

from typing import Any


class ChemistryError(Exception):
    """Base class for all recoverable engine errors."""

    kind = "ChemistryError"


class EmptyInput(ChemistryError):
    kind = "EmptyInput"

    def __init__(self, field: str, detail: str | None = None):
        self.field = field
        super().__init__(detail or f"{field} cannot be empty.")


class MismatchedParentheses(ChemistryError):
    kind = "MismatchedParentheses"

    def __init__(self, text: str, position: int):
        self.text = text
        self.position = position
        super().__init__(f"Mismatched parentheses at position {position} in formula {text!r}.")


class UnknownElement(ChemistryError):
    kind = "UnknownElement"

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Unknown element: {symbol}")


class InvalidFormulaSyntax(ChemistryError):
    kind = "InvalidFormulaSyntax"

    def __init__(self, text: str, position: int):
        self.text = text
        self.position = position
        super().__init__(f"Invalid character or format at position {position} in formula {text!r}.")


class InvalidTerm(ChemistryError):
    kind = "InvalidTerm"

    def __init__(self, term: str, detail: str | None = None):
        self.term = term
        super().__init__(
            detail
            or f"Invalid term: {term!r}. Terms should look like '2H2O' or 'H2O'."
        )


class MalformedEquation(ChemistryError):
    kind = "MalformedEquation"

    def __init__(self, text: str):
        self.text = text
        super().__init__(
            f"Equation {text!r} must contain exactly one '->' separating reactants and products."
        )


class SpeciesNotInEquation(ChemistryError):
    kind = "SpeciesNotInEquation"
    side = "equation"

    def __init__(self, formula: str):
        self.formula = formula
        super().__init__(f"Substance {formula!r} not found in the {self.side}.")


class ReactantNotInEquation(SpeciesNotInEquation):
    side = "equation's reactants"


class ProductNotInEquation(SpeciesNotInEquation):
    side = "equation's products"


class InvalidAmount(ChemistryError):
    kind = "InvalidAmount"

    def __init__(self, value: Any, detail: str | None = None):
        self.value = value
        super().__init__(detail or f"Amount must be a positive number, got {value!r}.")


class InvalidUnit(ChemistryError):
    kind = "InvalidUnit"

    def __init__(self, unit: Any):
        self.unit = unit
        super().__init__(f"Unit must be 'g' or 'mol', got {unit!r}.")
