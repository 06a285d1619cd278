"""StoiChem core package."""

from stoichem.balance import check_balance, check_equation
from stoichem.equation import parse_equation, parse_side
from stoichem.formula import parse_formula
from stoichem.limiting import resolve_limiting
from stoichem.mass import mass_percent, molar_mass
from stoichem.models import CalculationResult, Equation, EquationSide, Formula
from stoichem.outcome import Failure, Success, attempt
from stoichem.periodic_table import DEFAULT_TABLE, PeriodicTable, load_periodic_table
from stoichem.stoichiometry import SpeciesAmount, Unit, convert, percent_yield, to_moles

__all__ = [
    "check_balance",
    "check_equation",
    "parse_equation",
    "parse_side",
    "parse_formula",
    "resolve_limiting",
    "mass_percent",
    "molar_mass",
    "CalculationResult",
    "Equation",
    "EquationSide",
    "Formula",
    "Failure",
    "Success",
    "attempt",
    "DEFAULT_TABLE",
    "PeriodicTable",
    "load_periodic_table",
    "SpeciesAmount",
    "Unit",
    "convert",
    "percent_yield",
    "to_moles",
]
