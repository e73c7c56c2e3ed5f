from pydantic import BaseModel, Field, ConfigDict, StrictFloat, StrictInt, StrictStr, field_validator, model_validator
from typing import Any, Dict, List, Literal, Union
import yaml
import orjson

from ..errors import WeightTableError
from ..strategies.builtin import BASELINE
from ..weights.table import normalize_key, to_fraction


class JobSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    version: str = "v0"
    job_id: str
    sequences: Dict[str, str] = Field(default_factory=dict)  # name -> sequence
    fasta: List[str] = Field(default_factory=list)  # paths, relative to the cwd
    base: Literal["iupac", "empty"] = "iupac"
    weights: Dict[str, Union[StrictInt, StrictFloat, StrictStr]] = Field(default_factory=dict)  # overrides on top of base
    strategies: List[str] = Field(default_factory=lambda: [BASELINE])
    repeat: int = Field(default=1, ge=1)
    report: bool = False

    @field_validator("weights")
    @classmethod
    def _check_weights(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        seen = set()
        for key, value in v.items():
            try:
                char = normalize_key(key)
                to_fraction(value)
            except WeightTableError as e:
                raise ValueError(str(e)) from e
            if char in seen:
                raise ValueError(f"duplicate weight for {char!r}")
            seen.add(char)
        return v

    @model_validator(mode="after")
    def _check_sources(self) -> "JobSpec":
        if not self.sequences and not self.fasta:
            raise ValueError("job needs at least one of 'sequences' or 'fasta'")
        return self


def load_yaml(path: str) -> JobSpec:
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    return JobSpec.model_validate(data)


def normalize_json(data: Any) -> bytes:
    return orjson.dumps(data, option=orjson.OPT_SORT_KEYS)
