import logging
from typing import List, Optional

import typer
from pydantic import ValidationError

from ..dsl.schema import load_yaml
from ..calculator import GCContentCalculator
from ..compiler import compile_job
from ..errors import GCRunError
from ..runtime.local import run_plan, verify_strategies
from ..artifacts.store import dumps_json, get_json, put_json
from ..strategies.builtin import BASELINE
from ..strategies.registry import resolve_strategy


app = typer.Typer(help="GC content calculator and strategy verification harness")


def _fail(e: Exception) -> None:
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def compute(sequences: List[str], strategy: str = BASELINE):
    """Print the GC content of each SEQUENCE."""
    try:
        calc = GCContentCalculator(strategy=resolve_strategy(strategy))
    except GCRunError as e:
        _fail(e)
    for seq in sequences:
        print(f"{seq}\t{calc.compute(seq)!r}")


@app.command()
def compile(path: str):
    try:
        _, manifest = compile_job(load_yaml(path))
    except (GCRunError, ValidationError, OSError) as e:
        _fail(e)
    print("Plan compiled.")
    print(put_json(manifest))


@app.command()
def run(path: str, workers: Optional[int] = typer.Option(None, min=1, help="Thread pool size")):
    try:
        plan, _ = compile_job(load_yaml(path))
        result = run_plan(plan, max_workers=workers)
    except (GCRunError, ValidationError, OSError) as e:
        _fail(e)
    print(result["run_digest"])


@app.command()
def verify(path: str):
    """Check every strategy of a job against the baseline without storing anything."""
    try:
        plan, _ = compile_job(load_yaml(path))
        verify_strategies(plan.tasks, plan.table, plan.strategies, plan.repeat)
    except (GCRunError, ValidationError, OSError) as e:
        _fail(e)
    print("ok")


@app.command()
def show(digest: str):
    try:
        obj = get_json(digest)
    except GCRunError as e:
        _fail(e)
    print(dumps_json(obj, indent=True).decode())


if __name__ == "__main__":
    app()
