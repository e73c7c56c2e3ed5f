import logging
from typing import Dict, Any, List, Tuple

from blake3 import blake3
from Bio import SeqIO

from .dsl.schema import JobSpec, normalize_json
from .errors import DuplicateSequenceError
from .ir.model import Plan, SequenceTask
from .strategies.builtin import BASELINE
from .strategies.registry import entrypoint_for, resolve_strategy
from .weights.table import EMPTY_WEIGHTS, IUPAC_WEIGHTS, WeightTable


logger = logging.getLogger(__name__)


def build_table(job: JobSpec) -> WeightTable:
    base = IUPAC_WEIGHTS if job.base == "iupac" else EMPTY_WEIGHTS
    if not job.weights:
        return base
    return base.with_overrides(job.weights)


def collect_sequences(job: JobSpec) -> List[SequenceTask]:
    tasks: Dict[str, SequenceTask] = {}
    for name, seq in job.sequences.items():
        tasks[name] = SequenceTask(name=name, sequence=seq, source="inline")
    for path in job.fasta:
        count = 0
        for record in SeqIO.parse(path, "fasta"):
            if record.id in tasks:
                raise DuplicateSequenceError(f"sequence {record.id!r} from {path} is already defined by {tasks[record.id].source}")
            tasks[record.id] = SequenceTask(name=record.id, sequence=str(record.seq), source=path)
            count += 1
        logger.info(f"Read {count} sequences from {path}")
    return [tasks[name] for name in sorted(tasks)]


def resolve_strategies(names: List[str]) -> List[str]:
    # Baseline always runs first, and only once
    ordered: List[str] = [entrypoint_for(BASELINE)]
    for name in names:
        path = entrypoint_for(name)
        if path not in ordered:
            ordered.append(path)
    for path in ordered:
        resolve_strategy(path)  # fail at compile time rather than mid-run
    return ordered


def derive_digest(job: JobSpec, tasks: List[SequenceTask], table: WeightTable, strategies: List[str]) -> str:
    payload = normalize_json(
        {
            "dsl_version": job.version,
            "job_id": job.job_id,
            "sequences": {t.name: blake3(t.sequence.encode("utf-8")).hexdigest() for t in tasks},
            "weights": table.to_json(),
            "strategies": strategies,
            "repeat": job.repeat,
        }
    )
    return blake3(payload).hexdigest()


def compile_job(job: JobSpec) -> Tuple[Plan, Dict[str, Any]]:
    tasks = collect_sequences(job)
    table = build_table(job)
    strategies = resolve_strategies(job.strategies)
    manifest: Dict[str, Any] = {
        "job_id": job.job_id,
        "plan_digest": derive_digest(job, tasks, table, strategies),
        "sequences": [{"name": t.name, "length": len(t.sequence), "source": t.source} for t in tasks],
        "weights": table.to_json(),
        "scale": table.scale,
        "strategies": strategies,
        "repeat": job.repeat,
    }
    logger.debug(f"Compiled job {job.job_id}: {len(tasks)} sequences, {len(strategies)} strategies")
    plan = Plan(tasks=tasks, table=table, strategies=strategies, repeat=job.repeat, report=job.report, manifest=manifest)
    return plan, manifest
