from __future__ import annotations

import difflib
import importlib
import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from .config import TesterSettings, load_settings
from .eval.params import CallParams
from .types import RenderContext, TesterNotFound, TesterRegistryError, TmplValue

logger = logging.getLogger(__name__)

class Tester:
    """Base for every tester family: a bound predicate over a base value."""
    __slots__ = ('name',)

    def __init__(self, name: str):
        self.name = name

    def test(self, base: TmplValue, context: RenderContext) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<tester {self.name}>"

@dataclass(frozen=True)
class TesterFactory:
    """A registered name plus the family and its fixed configuration."""
    name: str
    family: Type[Tester]
    config: Any = None

    def __call__(self, params: Optional[CallParams]=None) -> Tester:
        if self.config is None:
            return self.family(self.name, params)
        return self.family(self.name, params, self.config)

_PENDING: Dict[str, TesterFactory] = {}
_REGISTRY: Mapping[str, TesterFactory] = MappingProxyType({})
_INIT_LOCK = threading.Lock()
_INITIALIZED = False

def register_tester(*names: str, config: Any=None) -> Callable[[Type[Tester]], Type[Tester]]:
    def dec(cls: Type[Tester]) -> Type[Tester]:
        for name in names:
            if _INITIALIZED:
                raise TesterRegistryError(f"Cannot register tester '{name}' after initialization")
            if name in _PENDING:
                raise TesterRegistryError(f"Tester '{name}' is already registered")
            _PENDING[name] = TesterFactory(name, cls, config)
        return cls

    return dec

def init_testers() -> None:
    """Load tester families (idempotent) and freeze the registry."""
    global _INITIALIZED, _REGISTRY

    if _INITIALIZED:
        return

    with _INIT_LOCK:
        if _INITIALIZED:
            return

        importlib.import_module("tmpl_testers.testers")
        _REGISTRY = MappingProxyType(dict(_PENDING))
        _INITIALIZED = True

    logger.debug("tester registry initialized with %d names", len(_REGISTRY))

def lookup(name: str) -> Optional[TesterFactory]:
    init_testers()
    return _REGISTRY.get(name)

def tester_names() -> List[str]:
    init_testers()
    return sorted(_REGISTRY)

def _suggest(name: str, settings: TesterSettings) -> Optional[str]:
    if not settings.suggest:
        return None

    matches = difflib.get_close_matches(name, list(_REGISTRY), n=1, cutoff=settings.suggest_cutoff)
    return matches[0] if matches else None

def create_tester(name: str, params: Optional[CallParams]=None, settings: Optional[TesterSettings]=None) -> Tester:
    factory = lookup(name)

    if factory is None:
        suggestion = _suggest(name, settings or load_settings())
        logger.warning("unknown tester %r requested", name)
        raise TesterNotFound(name, suggestion)

    tester = factory(params)
    logger.debug("constructed %r", tester)
    return tester
