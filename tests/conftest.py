# tests/conftest.py
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import logging
import os

import pytest

os.environ.setdefault("LOG_LEVEL", "DEBUG")

from variant_engine.core.logging import JsonFormatter
from variant_engine.schemas.variant import AttributeSet, VariantCombination
from variant_engine.services import variant_service


# ---------- Fixtures ----------
@pytest.fixture
def color_size() -> AttributeSet:
    return AttributeSet.from_mapping({"Color": ["Red", "Blue"], "Size": ["S", "M"]})


@pytest.fixture
def combinations(color_size) -> list[VariantCombination]:
    """Lista recién generada para Color x Size (4 combinaciones con valores por defecto)."""
    return variant_service.regenerate(color_size, []).combinations


@pytest.fixture
def logging_state():
    """Restaura handlers y niveles tras tests que llaman setup_logging()."""
    root = logging.getLogger()
    engine = logging.getLogger("variant_engine")
    saved_levels = (root.level, engine.level)
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
    root.setLevel(saved_levels[0])
    engine.setLevel(saved_levels[1])
