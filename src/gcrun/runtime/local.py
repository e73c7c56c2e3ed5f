from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Any, List, Optional
from ..calculator import GCContentCalculator
from ..errors import StrategyMismatchError
from ..ir.model import Plan, SequenceTask
from ..artifacts.store import digest_json, put_json
from ..strategies.registry import resolve_strategy
from ..weights.table import WeightTable
from pathlib import Path
from datetime import datetime, timezone
import logging
import time


logger = logging.getLogger(__name__)


def baseline_sums(tasks: List[SequenceTask], table: WeightTable, max_workers: int | None = None) -> Dict[str, int]:
    calc = GCContentCalculator(table)
    sums: Dict[str, int] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        futs = {ex.submit(calc.weighted_sum, t.sequence): t.name for t in tasks}
        for fut in as_completed(futs):
            sums[futs[fut]] = fut.result()
    return sums


def verify_strategies(
    tasks: List[SequenceTask],
    table: WeightTable,
    strategies: List[str],
    repeat: int = 1,
    expected: Optional[Dict[str, int]] = None,
) -> Dict[str, Dict[str, Any]]:
    """Run every strategy ``repeat`` times on every task and check it against the baseline.

    Raises StrategyMismatchError on the first disagreement. Returns per-strategy
    timings, which are informational only.
    """
    if expected is None:
        expected = baseline_sums(tasks, table)
    timings: Dict[str, Dict[str, Any]] = {}
    for path in strategies:
        strategy = resolve_strategy(path)
        elapsed: List[int] = []
        for task in tasks:
            want = expected[task.name]
            for _ in range(repeat):
                start = time.perf_counter_ns()
                got = strategy.weighted_sum(task.sequence, table)
                elapsed.append(time.perf_counter_ns() - start)
                if got != want:
                    raise StrategyMismatchError(path, task.name, want, got)
        total_ns = sum(elapsed)
        timings[path] = {
            "calls": len(elapsed),
            "total_ns": total_ns,
            "mean_ns": total_ns / len(elapsed) if elapsed else 0.0,
        }
        logger.debug(f"Strategy {path} agreed on {len(tasks)} sequences in {total_ns} ns")
    return timings


def run_plan(plan: Plan, max_workers: int | None = None) -> Dict[str, Any]:
    sums = baseline_sums(plan.tasks, plan.table, max_workers)
    timings = verify_strategies(plan.tasks, plan.table, plan.strategies, plan.repeat, expected=sums)

    scale = plan.table.scale
    results: List[Dict[str, Any]] = []
    for t in plan.tasks:
        n = len(t.sequence)
        results.append(
            {
                "name": t.name,
                "length": n,
                "weighted_sum": sums[t.name],
                "gc_content": sums[t.name] / (scale * n) if n else 0.0,
            }
        )

    run_record: Dict[str, Any] = {"backend": "local", "manifest": plan.manifest, "results": results, "timings": timings}
    if plan.report:
        # imported lazily: matplotlib is only needed when a report is requested
        from ..report.producer import produce_report

        output_dir = Path(".gcrun/outputs") / plan.manifest.get("job_id", "job") / datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        output_dir.mkdir(parents=True, exist_ok=True)
        run_record["report"] = {"output_dir": str(output_dir), "artifacts": produce_report(run_record, output_dir)}

    run_digest = put_json(run_record)
    logger.info(f"Run of {plan.manifest.get('job_id')} stored as {run_digest}")
    return {"run_digest": run_digest, "results_digest": digest_json(results), "record": run_record}
