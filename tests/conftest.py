from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path
from typing import List

import pytest

# `tests.support` resolves from the repository root; `tmpl_testers` from src/
# when the package is not installed.
ROOT = Path(__file__).resolve().parent.parent

for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.append(str(entry))


@pytest.fixture
def render_context():
    from tmpl_testers.types import RenderContext

    return RenderContext()


def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    """Scenario tables share one test function; clashing ids would hide cases."""
    del config

    counts = Counter(item.nodeid for item in items)
    clashes = sorted(nodeid for nodeid, seen in counts.items() if seen > 1)

    if clashes:
        listing = "\n".join(f"  {nodeid}" for nodeid in clashes)
        raise pytest.UsageError(f"scenario ids collide:\n{listing}")
