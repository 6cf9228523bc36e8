import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import gridgenie_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from gridgenie_toolkit.core.models import LayoutConfig
from gridgenie_toolkit.engine.placement.factory import ElementFactory
from gridgenie_toolkit.engine.placement.ids import SequentialIdProvider
from gridgenie_toolkit.engine.text.lorem import LoremGenerator


# Common test fixtures
@pytest.fixture
def config():
    """Default A4 config: 6x8 grid, 5mm spacing, 15/20mm margins."""
    return LayoutConfig()


@pytest.fixture
def lorem():
    """Seeded placeholder text."""
    return LoremGenerator(seed=42)


@pytest.fixture
def factory(lorem):
    """Factory with deterministic ids (text-1, image-2, ...)."""
    return ElementFactory(id_provider=SequentialIdProvider(), text_provider=lorem)
