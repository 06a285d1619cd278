"""Command-line entrypoints for StoiChem."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Callable, Dict, List

import typer

from stoichem.balance import check_balance
from stoichem.limiting import resolve_limiting
from stoichem.mass import molar_mass
from stoichem.models import (
    BalanceReport,
    CalculationResult,
    ConversionResult,
    LimitingResult,
    MolarMassResult,
)
from stoichem.outcome import Failure, Outcome, attempt
from stoichem.periodic_table import PeriodicTable, load_periodic_table
from stoichem.stoichiometry import SpeciesAmount, convert, percent_yield

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)

TableOption = Annotated[
    Path | None,
    typer.Option(
        "--table",
        envvar="STOICHEM_PERIODIC_TABLE",
        help="JSON file of element symbol -> atomic weight to use instead of the bundled table.",
    ),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the result as JSON.")]


def _setup(table_file: Path | None, verbose: bool) -> PeriodicTable:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    table = load_periodic_table(table_file)
    logger.debug("Loaded periodic table with %d elements from %s", len(table), table_file or "package data")
    return table


def _payload(result: Any) -> Dict[str, Any]:
    if isinstance(result, BalanceReport):
        return {
            "balanced": result.balanced,
            "tally": {
                element: {"reactants": counts.reactant, "products": counts.product}
                for element, counts in result.tally.items()
            },
        }

    data: Dict[str, Any] = {"value": result.value, "unit": result.unit, "steps": list(result.steps)}
    if isinstance(result, MolarMassResult):
        data["formula"] = result.formula.text
        data["counts"] = dict(result.formula.counts)
        data["contributions"] = [
            {
                "element": part.element,
                "count": part.count,
                "atomic_weight": part.atomic_weight,
                "contribution": part.contribution,
            }
            for part in result.contributions
        ]
    elif isinstance(result, ConversionResult):
        data["known_moles"] = result.known_moles
        data["moles"] = result.moles
    elif isinstance(result, LimitingResult):
        data["limiting_reactant"] = result.limiting_reactant
        data["product"] = result.product
        data["yield_moles"] = result.yield_moles
        data["candidates"] = [
            {
                "formula": candidate.formula,
                "moles": candidate.moles,
                "product_moles": candidate.product_moles,
                "excess_moles": candidate.excess_moles,
            }
            for candidate in result.candidates
        ]
    return data


def _render(result: Any) -> str:
    if isinstance(result, BalanceReport):
        lines = [f"Equation is {'BALANCED' if result.balanced else 'NOT BALANCED'}"]
        lines.append(f"{'Element':<8}{'Reactants':>10}{'Products':>10}")
        for element, counts in result.tally.items():
            mark = "ok" if counts.balanced else "x"
            lines.append(f"{element:<8}{counts.reactant:>10}{counts.product:>10}  {mark}")
        return "\n".join(lines)

    if isinstance(result, MolarMassResult):
        header = f"Molar mass of {result.formula.text}: {result.total:.3f} g/mol"
    elif isinstance(result, LimitingResult):
        header = (
            f"Limiting reactant: {result.limiting_reactant}\n"
            f"Theoretical yield: {result.yield_mass:.3f} g {result.product}"
            f" ({result.yield_moles:.4f} mol)"
        )
    elif result.unit == "%":
        header = f"Percent yield: {result.value:.2f} %"
    else:
        header = f"Result: {result.value:.3f} {result.unit}"
    return "\n".join([header, *result.steps])


def _emit(outcome: Outcome, as_json: bool) -> None:
    if isinstance(outcome, Failure):
        logger.info("Calculation failed with %s", outcome.kind)
        typer.echo(f"Error ({outcome.kind}): {outcome.message}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(_payload(outcome.value), indent=2, ensure_ascii=False))
    else:
        typer.echo(_render(outcome.value))


def _parse_reactant(text: str) -> SpeciesAmount:
    parts = [part.strip() for part in text.split(":")]
    if len(parts) not in (2, 3):
        raise typer.BadParameter(f"Expected FORMULA:AMOUNT[:UNIT], got {text!r}")
    unit = parts[2] if len(parts) == 3 else "g"
    return SpeciesAmount(formula=parts[0], amount=parts[1], unit=unit)


@app.command("molar-mass")
def molar_mass_command(
    formula: Annotated[str, typer.Argument(help="Chemical formula, e.g. Mg(OH)2.")],
    as_json: JsonOption = False,
    table: TableOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Calculate the molar mass of a formula."""
    periodic_table = _setup(table, verbose)
    _emit(attempt(molar_mass, formula, periodic_table), as_json)


@app.command()
def balance(
    reactants: Annotated[str, typer.Argument(help="Reactant side, e.g. '2H2 + O2'.")],
    products: Annotated[str, typer.Argument(help="Product side, e.g. '2H2O'.")],
    as_json: JsonOption = False,
    table: TableOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Check whether an equation's atom counts are balanced.

    Exits with code 2 when the equation parses but is not balanced.
    """
    periodic_table = _setup(table, verbose)
    outcome = attempt(check_balance, reactants, products, periodic_table)
    _emit(outcome, as_json)
    if not outcome.value.balanced:
        raise typer.Exit(code=2)


@app.command("convert")
def convert_command(
    equation: Annotated[str, typer.Argument(help="Balanced equation, e.g. '2H2 + O2 -> 2H2O'.")],
    known: Annotated[str, typer.Argument(help="Formula of the known substance.")],
    amount: Annotated[str, typer.Argument(help="Amount of the known substance.")],
    target: Annotated[str, typer.Argument(help="Formula of the target substance.")],
    unit: Annotated[str, typer.Option(help="Unit of AMOUNT: g or mol.")] = "g",
    as_json: JsonOption = False,
    table: TableOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Convert an amount of one species into the mass of another."""
    periodic_table = _setup(table, verbose)
    request = SpeciesAmount(formula=known, amount=amount, unit=unit)
    _emit(attempt(convert, equation, request, target, periodic_table), as_json)


@app.command()
def limiting(
    equation: Annotated[str, typer.Argument(help="Balanced equation, e.g. 'N2 + 3H2 -> 2NH3'.")],
    target: Annotated[str, typer.Argument(help="Product whose yield is calculated.")],
    reactant: Annotated[
        List[str],
        typer.Option("--reactant", "-r", help="Reactant as FORMULA:AMOUNT[:UNIT]; repeatable."),
    ],
    as_json: JsonOption = False,
    table: TableOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Find the limiting reactant and the theoretical yield."""
    periodic_table = _setup(table, verbose)
    reactants = [_parse_reactant(item) for item in reactant]
    _emit(attempt(resolve_limiting, equation, reactants, target, periodic_table), as_json)


@app.command("percent-yield")
def percent_yield_command(
    actual: Annotated[str, typer.Argument(help="Actual yield (g).")],
    theoretical: Annotated[str, typer.Argument(help="Theoretical yield (g).")],
    as_json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Calculate percent yield from actual and theoretical yields."""
    _setup(None, verbose)
    _emit(attempt(percent_yield, actual, theoretical), as_json)


def _species(data: Dict[str, Any]) -> SpeciesAmount:
    return SpeciesAmount(
        formula=data.get("formula", ""),
        amount=data.get("amount"),
        unit=data.get("unit", "g"),
    )


JOBS: Dict[str, Callable[[Dict[str, Any], PeriodicTable], Outcome]] = {
    "molar_mass": lambda job, table: attempt(molar_mass, job.get("formula", ""), table),
    "balance": lambda job, table: attempt(
        check_balance, job.get("reactants", ""), job.get("products", ""), table
    ),
    "stoichiometry": lambda job, table: attempt(
        convert, job.get("equation", ""), _species(job.get("known", {})), job.get("target", ""), table
    ),
    "limiting": lambda job, table: attempt(
        resolve_limiting,
        job.get("equation", ""),
        [_species(item) for item in job.get("reactants", [])],
        job.get("target", ""),
        table,
    ),
    "percent_yield": lambda job, table: attempt(
        percent_yield, job.get("actual"), job.get("theoretical")
    ),
}


def run_jobs(config: Dict[str, Any], table: PeriodicTable) -> List[Dict[str, Any]]:
    results = []
    for index, job in enumerate(config.get("jobs", [])):
        job_type = str(job.get("type", "")).lower()
        if job_type not in JOBS:
            raise ValueError(f"Unknown job type: {job_type}")

        outcome = JOBS[job_type](job, table)
        entry: Dict[str, Any] = {"type": job_type, "ok": outcome.ok}
        if isinstance(outcome, Failure):
            logger.info("Job %d (%s) failed: %s", index, job_type, outcome.message)
            entry["error"] = {"kind": outcome.kind, "message": outcome.message}
        else:
            entry["result"] = _payload(outcome.value)
        results.append(entry)
    return results


@app.command()
def run(
    config_file: Annotated[
        Path, typer.Argument(help="Path to JSON file listing calculation jobs.")
    ],
    output: Annotated[
        Path | None, typer.Option(help="Path to save output JSON.")
    ] = None,
    table: TableOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Run a batch of calculations from a config file."""
    with open(config_file, "r") as f:
        config = json.load(f)

    # a table named in the config file takes precedence over --table
    table_file = config.get("table")
    if table_file is not None:
        table_file = (config_file.parent / table_file).resolve()
    periodic_table = _setup(table_file or table, verbose)

    results = run_jobs(config, periodic_table)
    json_output = json.dumps({"results": results}, indent=2, ensure_ascii=False)
    typer.echo(json_output)

    if output:
        with open(output, "w") as f:
            f.write(json_output)
