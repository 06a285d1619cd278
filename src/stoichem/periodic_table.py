"""Atomic weight lookup used by the formula parser and mass calculations."""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from stoichem.errors import UnknownElement

SYMBOL_PATTERN = re.compile(r"^[A-Z][a-z]?$")


@dataclass(frozen=True)
class PeriodicTable:
    """Read-only mapping of element symbol to standard atomic weight (g/mol)."""

    weights: Mapping[str, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.weights

    def __iter__(self) -> Iterator[str]:
        return iter(self.weights)

    def __len__(self) -> int:
        return len(self.weights)

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(self.weights)

    def get(self, symbol: str, default: float | None = None) -> float | None:
        return self.weights.get(symbol, default)

    def weight(self, symbol: str) -> float:
        try:
            return self.weights[symbol]
        except KeyError:
            raise UnknownElement(symbol) from None


def _validate(weights: Mapping[str, object]) -> dict[str, float]:
    validated: dict[str, float] = {}
    for symbol, weight in weights.items():
        if not SYMBOL_PATTERN.match(symbol):
            raise ValueError(f"Invalid element symbol in periodic table: {symbol!r}")
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise ValueError(f"Atomic weight for {symbol} must be a number, got {weight!r}")
        if not math.isfinite(weight) or weight <= 0:
            raise ValueError(f"Atomic weight for {symbol} must be positive, got {weight!r}")
        validated[symbol] = float(weight)
    return validated


def load_periodic_table(path: str | Path | None = None) -> PeriodicTable:
    """Load atomic weights from a JSON object of ``symbol -> weight``.

    Args:
        path: Optional JSON file. ``None`` loads the bundled 92-element table.

    Returns:
        An immutable :class:`PeriodicTable`.

    Raises:
        ValueError: If the file holds anything but valid symbols and positive weights.
    """
    if path is None:
        raw = resources.files("stoichem").joinpath("data/atomic_weights.json").read_text(
            encoding="utf-8"
        )
    else:
        raw = Path(path).read_text(encoding="utf-8")

    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Periodic table file must contain a JSON object.")
    return PeriodicTable(_validate(data))


DEFAULT_TABLE = load_periodic_table()
