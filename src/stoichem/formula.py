"""Recursive-descent parser for chemical formulas.

Grammar::

    formula       := term*
    term          := element-group | group
    element-group := UPPER lower? digits?
    group         := '(' formula ')' digits?

Counts accumulate additively, so ``CH3(CH2)2OH`` yields ``{C: 3, H: 8, O: 1}``.
"""

from __future__ import annotations

import re
from typing import Mapping

from stoichem.errors import (
    EmptyInput,
    InvalidFormulaSyntax,
    MismatchedParentheses,
    UnknownElement,
)
from stoichem.models import Formula
from stoichem.periodic_table import DEFAULT_TABLE, PeriodicTable

ELEMENT_PATTERN = re.compile(r"[A-Z][a-z]?")
DIGITS_PATTERN = re.compile(r"[0-9]*")

# bounds keep counts convertible to float and recursion shallow
MAX_COUNT_DIGITS = 9
MAX_ATOMS = 10**15
MAX_DEPTH = 64


def parse_formula(text: str, table: PeriodicTable = DEFAULT_TABLE) -> Formula:
    """Parse ``text`` into a :class:`Formula`.

    Args:
        text: Formula such as ``H2O``, ``Mg(OH)2`` or ``K4(Fe(CN)6)``.
        table: Periodic table used to validate element symbols.

    Raises:
        EmptyInput: If ``text`` is blank.
        MismatchedParentheses: If a ``(`` or ``)`` has no partner.
        UnknownElement: If a symbol is not in ``table``.
        InvalidFormulaSyntax: For any other character the grammar does not accept,
            a count longer than nine digits, more than ``MAX_ATOMS`` atoms of one
            element, or groups nested deeper than ``MAX_DEPTH``.
    """
    if text is None or not text.strip():
        raise EmptyInput("Formula", "Please enter a chemical formula.")

    stripped = text.strip()
    counts, _ = _parse_sequence(stripped, 0, table, opening=None)
    return Formula(stripped, counts)


def _parse_sequence(
    text: str,
    position: int,
    table: PeriodicTable,
    opening: int | None,
    depth: int = 0,
) -> tuple[dict[str, int], int]:
    """Parse terms from ``position`` until the end of text or the group's ``)``.

    ``opening`` is the index of the ``(`` that started this group, or ``None``
    at the top level. Returns the counts and the index just past what was read.
    """
    counts: dict[str, int] = {}
    while position < len(text):
        char = text[position]
        if char == "(":
            if depth >= MAX_DEPTH:
                raise InvalidFormulaSyntax(text, position)
            group, end = _parse_sequence(
                text, position + 1, table, opening=position, depth=depth + 1
            )
            if not group:
                raise InvalidFormulaSyntax(text, position)
            multiplier, end = _read_count(text, end)
            _merge(counts, group, multiplier, text, position)
            position = end
        elif char == ")":
            if opening is None:
                raise MismatchedParentheses(text, position)
            return counts, position + 1
        else:
            match = ELEMENT_PATTERN.match(text, position)
            if match is None:
                raise InvalidFormulaSyntax(text, position)
            symbol = match.group()
            if symbol not in table:
                raise UnknownElement(symbol)
            count, end = _read_count(text, match.end())
            _merge(counts, {symbol: count}, 1, text, position)
            position = end

    if opening is not None:
        raise MismatchedParentheses(text, opening)
    return counts, position


def _read_count(text: str, position: int) -> tuple[int, int]:
    digits = DIGITS_PATTERN.match(text, position).group()
    if not digits:
        return 1, position
    if len(digits) > MAX_COUNT_DIGITS:
        raise InvalidFormulaSyntax(text, position)
    value = int(digits)
    if value == 0:
        raise InvalidFormulaSyntax(text, position)
    return value, position + len(digits)


def _merge(
    counts: dict[str, int],
    group: Mapping[str, int],
    multiplier: int,
    text: str,
    position: int,
) -> None:
    for element, count in group.items():
        total = counts.get(element, 0) + count * multiplier
        if total > MAX_ATOMS:
            raise InvalidFormulaSyntax(text, position)
        counts[element] = total
