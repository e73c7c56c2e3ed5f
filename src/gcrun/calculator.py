from typing import Optional

from .sdk.base import StrategyBase
from .strategies.builtin import ScanStrategy
from .weights.table import IUPAC_WEIGHTS, WeightTable


class GCContentCalculator:
    """Fractional GC content of a nucleotide sequence.

    Every character is looked up in the weight table (case-insensitive);
    unknown characters weigh 0 but still count towards the length. The
    calculator holds no mutable state and can be shared between threads.
    """

    def __init__(self, table: WeightTable = IUPAC_WEIGHTS, strategy: Optional[StrategyBase] = None):
        self.table = table
        self.strategy = strategy if strategy is not None else ScanStrategy()

    def weighted_sum(self, sequence: str) -> int:
        return self.strategy.weighted_sum(sequence, self.table)

    def compute(self, sequence: str) -> float:
        if not sequence:
            return 0.0
        return self.weighted_sum(sequence) / (self.table.scale * len(sequence))

    __call__ = compute


_default = GCContentCalculator()


def gc_content(sequence: str) -> float:
    return _default.compute(sequence)
