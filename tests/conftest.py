import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make the package importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fuzzy_filters.core.pixel_buffer import PixelBuffer  # noqa: E402

BACKENDS = ("jit", "numpy", "python")


@pytest.fixture(params=BACKENDS)
def backend(request) -> str:
    """Run a test once per executor."""
    return request.param


@pytest.fixture
def random_buffer():
    """Return a factory producing reproducible random RGBA buffers."""

    def _make(width: int = 7, height: int = 5, seed: int = 1234) -> PixelBuffer:
        rng = np.random.default_rng(seed)
        data = rng.integers(0, 256, size=width * height * 4, dtype=np.uint8)
        return PixelBuffer(width, height, data)

    return _make
