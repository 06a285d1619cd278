"""Explicit success/failure variants for callers of the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from stoichem.errors import ChemistryError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    ok = True


@dataclass(frozen=True)
class Failure:
    error: ChemistryError
    ok = False

    @property
    def kind(self) -> str:
        return self.error.kind

    @property
    def message(self) -> str:
        return str(self.error)


Outcome = Union[Success[T], Failure]


def attempt(operation: Callable[..., T], *args: Any, **kwargs: Any) -> Outcome[T]:
    """Run an engine operation and wrap its result or its :class:`ChemistryError`.

    Anything that is not a ``ChemistryError`` still propagates.
    """
    try:
        return Success(operation(*args, **kwargs))
    except ChemistryError as error:
        return Failure(error)
