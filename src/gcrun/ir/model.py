from dataclasses import dataclass
from typing import Any, Dict, List

from ..weights.table import WeightTable


@dataclass(frozen=True)
class SequenceTask:
    name: str
    sequence: str
    source: str  # "inline" or the FASTA path it was read from


@dataclass(frozen=True)
class Plan:
    tasks: List[SequenceTask]
    table: WeightTable
    strategies: List[str]  # import paths, baseline first
    repeat: int
    report: bool
    manifest: Dict[str, Any]
