"""Every executor must produce byte-identical results."""

from __future__ import annotations

import pytest
from numba.core.dispatcher import Dispatcher
from numba.core.errors import NumbaError

from fuzzy_filters.core import filters
from fuzzy_filters.core.filters import fallback_executor, jit_executor, region
from fuzzy_filters.core.kernels import KERNELS

OPERATIONS = {
    "color_filter": lambda buffer, backend: filters.color_filter(buffer, "green", backend=backend),
    "invert": lambda buffer, backend: filters.invert(buffer, "red", backend=backend),
    "greyscale": lambda buffer, backend: filters.greyscale(buffer, backend=backend),
    "pixelate": lambda buffer, backend: filters.pixelate(buffer, 3, backend=backend),
    "box_blur": lambda buffer, backend: filters.box_blur(buffer, 3, backend=backend),
    "motion_blur": lambda buffer, backend: filters.motion_blur(buffer, 4, "vertical", backend=backend),
}
OPERATIONS.update(
    {
        f"kernel:{name}": (
            lambda buffer, backend, kernel=kernel: filters.convolution(buffer, kernel, backend=backend)
        )
        for name, kernel in KERNELS.items()
    }
)


@pytest.mark.parametrize("operation", sorted(OPERATIONS))
def test_backends_agree(operation, random_buffer) -> None:
    apply = OPERATIONS[operation]
    results = {}
    for backend in ("jit", "numpy", "python"):
        buffer = random_buffer(11, 7, seed=99)
        apply(buffer, backend)
        results[backend] = buffer

    assert results["numpy"] == results["jit"]
    assert results["python"] == results["jit"]


def test_auto_falls_back_when_the_jit_kernel_fails(monkeypatch, random_buffer) -> None:
    def _broken(buffer):
        raise NumbaError("kernel failed to compile")

    monkeypatch.setattr(jit_executor, "apply_greyscale", _broken)
    expected = random_buffer()
    fallback_executor.apply_greyscale(expected)

    buffer = filters.greyscale(random_buffer(), backend="auto")

    assert buffer == expected


def test_explicit_jit_backend_propagates_compile_errors(monkeypatch, random_buffer) -> None:
    def _broken(buffer):
        raise NumbaError("kernel failed to compile")

    monkeypatch.setattr(jit_executor, "apply_greyscale", _broken)

    with pytest.raises(NumbaError):
        filters.greyscale(random_buffer(), backend="jit")


@pytest.mark.parametrize("module", [fallback_executor, region], ids=lambda module: module.__name__)
def test_pure_python_path_holds_no_compiled_kernels(module) -> None:
    compiled = [name for name, value in vars(module).items() if isinstance(value, Dispatcher)]

    assert compiled == []


def test_auto_survives_when_numba_cannot_compile_anything(monkeypatch, random_buffer) -> None:
    expected = {}
    for operation, apply in OPERATIONS.items():
        buffer = random_buffer(6, 5, seed=7)
        apply(buffer, "jit")
        expected[operation] = buffer

    def _refuse(self, *args, **kwargs):
        raise NumbaError("numba cannot compile on this platform")

    monkeypatch.setattr(Dispatcher, "_compile_for_args", _refuse)
    for name in dir(jit_executor):
        if name.startswith("apply_"):
            monkeypatch.setattr(jit_executor, name, lambda *args: _refuse(None))

    for operation, apply in OPERATIONS.items():
        buffer = random_buffer(6, 5, seed=7)
        apply(buffer, "auto")
        assert buffer == expected[operation], operation
