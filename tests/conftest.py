import sys
from pathlib import Path

import pytest

# Make 'src' importable without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from dungeonites.clock import ManualClock  # noqa: E402
from dungeonites.effects import EffectInstanceEngine, default_catalog  # noqa: E402


@pytest.fixture
def clock():
    return ManualClock(current_ms=1_000)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def engine(catalog, clock):
    return EffectInstanceEngine(catalog, clock)
