"""Parsing of equation sides and full reaction equations."""

from __future__ import annotations

import re

from stoichem.errors import EmptyInput, InvalidTerm, MalformedEquation
from stoichem.formula import MAX_COUNT_DIGITS, parse_formula
from stoichem.models import Equation, EquationSide, Term
from stoichem.periodic_table import DEFAULT_TABLE, PeriodicTable

TERM_PATTERN = re.compile(r"^([0-9]+)?\s*([A-Za-z0-9()]+)$")
ARROW_PATTERN = re.compile(r"->|→")
COEFFICIENT_PATTERN = re.compile(r"[0-9]+")


def parse_side(text: str, table: PeriodicTable = DEFAULT_TABLE) -> EquationSide:
    """Split ``text`` on ``+`` into weighted terms such as ``2H2O``."""
    if text is None or not text.strip():
        raise EmptyInput("Equation side")

    pieces = [piece.strip() for piece in text.split("+")]
    terms = tuple(_parse_term(piece, table) for piece in pieces if piece)
    if not terms:
        raise InvalidTerm(text.strip(), f"No formulas found in {text.strip()!r}.")
    return EquationSide(terms)


def _parse_term(term: str, table: PeriodicTable) -> Term:
    if COEFFICIENT_PATTERN.fullmatch(term):
        raise InvalidTerm(
            term, f"Invalid term: {term!r}. Coefficients must be followed by a formula."
        )
    match = TERM_PATTERN.match(term)
    if match is None:
        raise InvalidTerm(term)

    digits, formula_text = match.groups()
    if digits and len(digits) > MAX_COUNT_DIGITS:
        raise InvalidTerm(term, f"Invalid term: {term!r}. Coefficient is too large.")
    coefficient = int(digits) if digits else 1
    if coefficient == 0:
        raise InvalidTerm(term, f"Invalid term: {term!r}. Coefficients must be at least 1.")
    return Term(coefficient, parse_formula(formula_text, table))


def parse_equation(text: str, table: PeriodicTable = DEFAULT_TABLE) -> Equation:
    """Parse ``reactants -> products`` into an :class:`Equation`.

    Both ``->`` and ``→`` are accepted as the directional marker.
    """
    if text is None or not text.strip():
        raise EmptyInput("Equation", "Balanced chemical equation is required.")

    parts = [part.strip() for part in ARROW_PATTERN.split(text)]
    if len(parts) != 2 or not all(parts):
        raise MalformedEquation(text.strip())

    reactants, products = parts
    return Equation(parse_side(reactants, table), parse_side(products, table))
