from pathlib import Path
from typing import Any
from blake3 import blake3
import orjson

from ..errors import ArtifactNotFoundError


ART_DIR = Path(".gcrun/artifacts")

# orjson only encodes 64-bit integers
_INT_MIN, _INT_MAX = -(2**63), 2**64 - 1


def json_safe(obj: Any) -> Any:
    """Replace integers orjson cannot encode (large-scale weight sums) with their decimal strings."""
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, int):
        return obj if _INT_MIN <= obj <= _INT_MAX else str(obj)
    if isinstance(obj, dict):
        return {k: json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [json_safe(v) for v in obj]
    return obj


def dumps_json(obj: Any, indent: bool = False) -> bytes:
    option = orjson.OPT_SORT_KEYS | (orjson.OPT_INDENT_2 if indent else 0)
    return orjson.dumps(json_safe(obj), option=option)


def digest_json(obj: Any) -> str:
    return blake3(dumps_json(obj)).hexdigest()


def artifact_path(digest: str) -> Path:
    return ART_DIR / f"{digest}.json"


def put_json(obj: Any) -> str:
    ART_DIR.mkdir(parents=True, exist_ok=True)
    d = digest_json(obj)
    p = artifact_path(d)
    if not p.exists():
        p.write_bytes(dumps_json(obj, indent=True))
    return d


def get_json(digest: str) -> Any:
    p = artifact_path(digest)
    if not p.exists():
        raise ArtifactNotFoundError(f"no artifact {digest} under {ART_DIR}")
    return orjson.loads(p.read_bytes())
