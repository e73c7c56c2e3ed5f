import importlib
import logging
from typing import Any

from ..errors import UnknownStrategyError
from ..sdk.base import StrategyBase
from .builtin import BUILTIN_STRATEGIES


logger = logging.getLogger(__name__)


def entrypoint_for(name: str) -> str:
    """Map a built-in name or a ``module:Class`` path to an import path."""
    if name in BUILTIN_STRATEGIES:
        return BUILTIN_STRATEGIES[name]
    if ":" in name:
        return name
    raise UnknownStrategyError(
        f"unknown strategy {name!r}; expected one of {sorted(BUILTIN_STRATEGIES)} or module:Class"
    )


def _load(path: str) -> Any:
    mod_name, cls_name = path.rsplit(":", 1) if ":" in path else path.rsplit(".", 1)
    try:
        mod = importlib.import_module(mod_name)
        return getattr(mod, cls_name)
    except (ImportError, AttributeError) as e:
        raise UnknownStrategyError(f"cannot load strategy {path!r}: {e}") from e


def resolve_strategy(name: str) -> StrategyBase:
    path = entrypoint_for(name)
    cls = _load(path)
    if not (isinstance(cls, type) and issubclass(cls, StrategyBase)):
        raise UnknownStrategyError(f"{path!r} is not a StrategyBase subclass")
    logger.debug(f"Resolved strategy {name!r} -> {path}")
    return cls()
