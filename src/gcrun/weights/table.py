from dataclasses import dataclass
from fractions import Fraction
from math import lcm
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union

from ..errors import WeightTableError


WeightLike = Union[Fraction, int, float, str]


def to_fraction(value: WeightLike) -> Fraction:
    """Parse a weight given as int, float, Fraction or a string like "1/3"."""
    if isinstance(value, bool):
        raise WeightTableError(f"weight must be a number, got {value!r}")
    try:
        if isinstance(value, float):
            # repr keeps the decimal the user wrote (0.1 -> 1/10, not the binary expansion)
            frac = Fraction(repr(value))
        else:
            frac = Fraction(value)
    except (TypeError, ValueError, ZeroDivisionError) as e:
        raise WeightTableError(f"invalid weight {value!r}: {e}") from e
    if frac < 0 or frac > 1:
        raise WeightTableError(f"weight {value!r} is outside [0, 1]")
    return frac


def normalize_key(key: Any) -> str:
    if not isinstance(key, str) or len(key) != 1 or not key.isascii():
        raise WeightTableError(f"weight table keys must be single ASCII characters, got {key!r}")
    return key.upper()


@dataclass(frozen=True)
class WeightTable:
    """Immutable, case-insensitive character -> GC weight table.

    Weights are kept as exact fractions. ``lookup`` holds the same weights as
    integer numerators over the common denominator ``scale`` for both letter
    cases, so a weighted sum is an exact integer and the GC ratio is one
    division: ``total / (scale * len(sequence))``.
    """

    weights: Mapping[str, Fraction]
    scale: int
    lookup: Mapping[str, int]

    @classmethod
    def from_weights(cls, weights: Mapping[Any, WeightLike]) -> "WeightTable":
        normalized: Dict[str, Fraction] = {}
        for key, value in weights.items():
            char = normalize_key(key)
            if char in normalized:
                raise WeightTableError(f"duplicate weight for {char!r}")
            normalized[char] = to_fraction(value)
        scale = lcm(1, *(w.denominator for w in normalized.values()))
        lookup: Dict[str, int] = {}
        for char in sorted(normalized):
            numerator = int(normalized[char] * scale)
            lookup[char] = numerator
            lookup[char.lower()] = numerator
        return cls(
            weights=MappingProxyType(dict(sorted(normalized.items()))),
            scale=scale,
            lookup=MappingProxyType(lookup),
        )

    def with_overrides(self, overrides: Mapping[Any, WeightLike]) -> "WeightTable":
        merged: Dict[str, WeightLike] = dict(self.weights)
        for key, value in overrides.items():
            merged[normalize_key(key)] = value
        return WeightTable.from_weights(merged)

    def weight(self, char: str) -> Fraction:
        return Fraction(self.lookup.get(char, 0), self.scale)

    def to_json(self) -> Dict[str, str]:
        return {char: str(w) for char, w in self.weights.items()}

    def __hash__(self) -> int:
        return hash((self.scale, tuple(self.lookup.items())))


IUPAC_WEIGHTS = WeightTable.from_weights(
    {
        # no G/C
        "A": 0, "T": 0, "U": 0, "W": 0,
        # pure G/C and G-or-C
        "G": 1, "C": 1, "S": 1,
        # half G/C
        "N": "1/2", "M": "1/2", "R": "1/2", "Y": "1/2", "K": "1/2",
        "V": "2/3",
        "D": "1/3", "B": "1/3", "H": "1/3",
    }
)

EMPTY_WEIGHTS = WeightTable.from_weights({})
