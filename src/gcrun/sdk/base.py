from abc import ABC, abstractmethod

from ..weights.table import WeightTable


class StrategyBase(ABC):
    """A way of computing the scaled weighted sum of a sequence.

    Implementations must return exactly ``sum(table.lookup.get(ch, 0) for ch in sequence)``.
    """

    name: str = ""

    @abstractmethod
    def weighted_sum(self, sequence: str, table: WeightTable) -> int:
        ...
