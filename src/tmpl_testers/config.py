from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

SUGGEST_ENV = "TMPL_TESTERS_SUGGEST"
SUGGEST_CUTOFF_ENV = "TMPL_TESTERS_SUGGEST_CUTOFF"

_FALSY = {"0", "false", "no", "off"}

@dataclass(frozen=True)
class TesterSettings:
    """Knobs for tester lookup diagnostics."""

    suggest: bool = True
    suggest_cutoff: float = 0.6

def load_settings(env: Optional[Mapping[str, str]]=None) -> TesterSettings:
    env = os.environ if env is None else env
    defaults = TesterSettings()

    raw = env.get(SUGGEST_ENV)
    suggest = defaults.suggest if raw is None else raw.strip().lower() not in _FALSY

    raw = env.get(SUGGEST_CUTOFF_ENV)
    cutoff = defaults.suggest_cutoff

    if raw is not None:
        try:
            cutoff = min(1.0, max(0.0, float(raw.strip())))
        except ValueError:
            cutoff = defaults.suggest_cutoff

    return TesterSettings(suggest=suggest, suggest_cutoff=cutoff)
