"""Data structures for formulas, equations and calculation results."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


def _freeze(mapping: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Formula:
    """A parsed formula: the raw text and its element counts.

    ``counts`` keeps the order in which elements were first seen while parsing,
    which is the order used for mass breakdowns.
    """

    text: str
    counts: Mapping[str, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "counts", _freeze(self.counts))

    @property
    def elements(self) -> tuple[str, ...]:
        return tuple(self.counts)

    @property
    def atom_count(self) -> int:
        return sum(self.counts.values())

    def hill_notation(self) -> str:
        """Render the counts in Hill order (C, H, then alphabetical)."""
        if "C" in self.counts:
            order = ["C"] + (["H"] if "H" in self.counts else [])
            order += sorted(el for el in self.counts if el not in ("C", "H"))
        else:
            order = sorted(self.counts)
        return "".join(
            el if self.counts[el] == 1 else f"{el}{self.counts[el]}" for el in order
        )


@dataclass(frozen=True)
class Term:
    coefficient: int
    formula: Formula


@dataclass(frozen=True)
class EquationSide:
    terms: tuple[Term, ...]

    def tally(self) -> dict[str, int]:
        """Coefficient-weighted element totals, in first-seen order."""
        totals: dict[str, int] = {}
        for term in self.terms:
            for element, count in term.formula.counts.items():
                totals[element] = totals.get(element, 0) + count * term.coefficient
        return totals

    def coefficients(self) -> dict[str, int]:
        return {term.formula.text: term.coefficient for term in self.terms}

    @property
    def formulas(self) -> tuple[str, ...]:
        return tuple(term.formula.text for term in self.terms)


@dataclass(frozen=True)
class Equation:
    reactants: EquationSide
    products: EquationSide

    def reactant_coefficients(self) -> dict[str, int]:
        return self.reactants.coefficients()

    def product_coefficients(self) -> dict[str, int]:
        return self.products.coefficients()

    def coefficients(self) -> dict[str, int]:
        """Merged coefficient table; a product entry overrides a reactant one."""
        merged = self.reactant_coefficients()
        merged.update(self.product_coefficients())
        return merged

    def formula(self, text: str) -> Formula | None:
        """Return the last parsed formula in the equation written as ``text``."""
        found = None
        for term in self.reactants.terms + self.products.terms:
            if term.formula.text == text:
                found = term.formula
        return found


@dataclass(frozen=True)
class ElementBalance:
    reactant: int
    product: int

    @property
    def balanced(self) -> bool:
        return self.reactant == self.product


@dataclass(frozen=True)
class BalanceReport:
    balanced: bool
    tally: Mapping[str, ElementBalance]

    def unbalanced_elements(self) -> tuple[str, ...]:
        return tuple(el for el, counts in self.tally.items() if not counts.balanced)


@dataclass(frozen=True)
class CalculationResult:
    """A numeric outcome plus ordered, human-readable derivation steps.

    Attributes:
        value: The computed quantity, at full float precision.
        unit: Unit of ``value`` (``g``, ``mol``, ``g/mol`` or ``%``).
        steps: Explanation lines in the order the calculation performed them.
    """

    value: float
    unit: str
    steps: tuple[str, ...]


@dataclass(frozen=True)
class MassContribution:
    element: str
    count: int
    atomic_weight: float
    contribution: float


@dataclass(frozen=True)
class MolarMassResult(CalculationResult):
    formula: Formula
    contributions: tuple[MassContribution, ...]

    @property
    def total(self) -> float:
        return self.value


@dataclass(frozen=True)
class ConversionResult(CalculationResult):
    known_moles: float
    moles: float


@dataclass(frozen=True)
class ReactantYield:
    formula: str
    moles: float
    product_moles: float
    excess_moles: float = 0.0


@dataclass(frozen=True)
class LimitingResult(CalculationResult):
    limiting_reactant: str
    product: str
    yield_moles: float
    candidates: tuple[ReactantYield, ...]

    @property
    def yield_mass(self) -> float:
        return self.value
