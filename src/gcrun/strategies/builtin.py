import re
from collections import Counter
from functools import lru_cache
from typing import Dict, List, Pattern, Tuple

import numpy as np

from ..sdk.base import StrategyBase
from ..weights.table import WeightTable


class ScanStrategy(StrategyBase):
    """Single pass over the sequence with a dict lookup per character. This is the baseline."""

    name = "scan"

    def weighted_sum(self, sequence: str, table: WeightTable) -> int:
        lookup = table.lookup
        total = 0
        for ch in sequence:
            total += lookup.get(ch, 0)
        return total


class CountStrategy(StrategyBase):
    name = "count"

    def weighted_sum(self, sequence: str, table: WeightTable) -> int:
        return sum(sequence.count(ch) * n for ch, n in table.lookup.items() if n)


class CounterStrategy(StrategyBase):
    name = "counter"

    def weighted_sum(self, sequence: str, table: WeightTable) -> int:
        counts = Counter(sequence)
        return sum(counts[ch] * n for ch, n in table.lookup.items() if n)


@lru_cache(maxsize=32)
def _weight_classes(table: WeightTable) -> Tuple[Tuple[Pattern[str], int], ...]:
    by_weight: Dict[int, List[str]] = {}
    for ch, n in table.lookup.items():
        if n:
            by_weight.setdefault(n, []).append(re.escape(ch))
    return tuple((re.compile("[" + "".join(chars) + "]"), n) for n, chars in sorted(by_weight.items()))


class RegexStrategy(StrategyBase):
    """One character class per distinct weight, counted with findall."""

    name = "regex"

    def weighted_sum(self, sequence: str, table: WeightTable) -> int:
        return sum(len(pattern.findall(sequence)) * n for pattern, n in _weight_classes(table))


_INT64_MAX = int(np.iinfo(np.int64).max)


@lru_cache(maxsize=32)
def _lookup_array(table: WeightTable) -> np.ndarray:
    lut = np.zeros(128, dtype=np.int64)
    for ch, n in table.lookup.items():
        lut[ord(ch)] = n
    return lut


class NumpyStrategy(StrategyBase):
    """Lookup array indexed by character code; non-ASCII codes weigh nothing.

    Falls back to a per-code histogram weighted with Python ints when the
    table's numerators or the sum could overflow int64.
    """

    name = "numpy"

    def weighted_sum(self, sequence: str, table: WeightTable) -> int:
        codes = np.fromiter(map(ord, sequence), dtype=np.int64, count=len(sequence))
        codes = codes[codes < 128]
        top = max(table.lookup.values(), default=0)
        if top <= _INT64_MAX and top * len(codes) <= _INT64_MAX:
            return int(_lookup_array(table)[codes].sum())
        counts = np.bincount(codes, minlength=128)
        return sum(int(counts[ord(ch)]) * n for ch, n in table.lookup.items() if n)


BUILTIN_STRATEGIES: Dict[str, str] = {
    "scan": "gcrun.strategies.builtin:ScanStrategy",
    "count": "gcrun.strategies.builtin:CountStrategy",
    "counter": "gcrun.strategies.builtin:CounterStrategy",
    "regex": "gcrun.strategies.builtin:RegexStrategy",
    "numpy": "gcrun.strategies.builtin:NumpyStrategy",
}

BASELINE = "scan"
