from __future__ import annotations

import numpy as np
import pytest

from fuzzy_filters.core.filters import (
    convolution,
    darken,
    edge_trace,
    emboss,
    gaussian_blur,
    lighten,
    luminosity,
    sharpen,
)
from fuzzy_filters.core.kernels import ConvolutionMatrix
from fuzzy_filters.core.pixel_buffer import PixelBuffer
from fuzzy_filters.errors import InvalidKernelError

IDENTITY = [[0, 0, 0], [0, 1, 0], [0, 0, 0]]


def _solid(width: int, height: int, rgba: tuple[int, int, int, int]) -> PixelBuffer:
    return PixelBuffer(width, height, np.tile(rgba, width * height))


def _opaque(buffer: PixelBuffer) -> PixelBuffer:
    buffer.data[3::4] = 255
    return buffer


def test_identity_kernel_preserves_colour_channels(backend, random_buffer) -> None:
    buffer = random_buffer()
    before = buffer.data.reshape(-1, 4).copy()

    convolution(buffer, IDENTITY, backend=backend)

    after = buffer.data.reshape(-1, 4)
    np.testing.assert_array_equal(after[:, :3], before[:, :3])
    assert (after[:, 3] == 255).all()


def test_invalid_kernel_fails_before_mutation(backend, random_buffer) -> None:
    buffer = random_buffer()
    expected = buffer.copy()

    with pytest.raises(InvalidKernelError):
        convolution(buffer, [[1, 0], [0, 1]], backend=backend)
    with pytest.raises(InvalidKernelError):
        convolution(buffer, None, backend=backend)  # type: ignore[arg-type]

    assert buffer == expected


def test_out_of_bounds_neighbours_contribute_nothing(backend) -> None:
    buffer = _solid(3, 3, (10, 10, 10, 255))

    convolution(buffer, np.ones((3, 3)), backend=backend)

    assert [[buffer.get(x, y).r for x in range(3)] for y in range(3)] == [
        [40, 60, 40],
        [60, 90, 60],
        [40, 60, 40],
    ]


def test_first_weight_index_is_horizontal(backend) -> None:
    buffer = PixelBuffer(3, 1, [10, 0, 0, 255, 20, 0, 0, 255, 30, 0, 0, 255])
    # Only weights[0][1] is set: each pixel takes its left neighbour.
    matrix = [[0, 1, 0], [0, 0, 0], [0, 0, 0]]

    convolution(buffer, matrix, backend=backend)

    assert [buffer.get(x, 0).r for x in range(3)] == [0, 10, 20]


def test_reads_come_from_a_snapshot(backend) -> None:
    buffer = PixelBuffer(3, 1, [10, 0, 0, 255, 20, 0, 0, 255, 30, 0, 0, 255])
    # Each pixel takes its right neighbour; an in-place pass would smear 30.
    matrix = [[0, 0, 0], [0, 0, 0], [0, 1, 0]]

    convolution(buffer, matrix, backend=backend)

    assert [buffer.get(x, 0).r for x in range(3)] == [20, 30, 0]


def test_divisor_and_offset_are_applied_then_clamped(backend) -> None:
    buffer = PixelBuffer(3, 1, [0, 101, 255, 9, 200, 3, 50, 9, 7, 8, 9, 9])

    convolution(buffer, IDENTITY, divisor=2, offset=10, backend=backend)

    assert buffer.get(0, 0).as_tuple() == (10, 60, 137, 255)
    assert buffer.get(1, 0).as_tuple() == (110, 11, 35, 255)

    convolution(buffer, IDENTITY, offset=-100, backend=backend)

    assert buffer.get(0, 0).as_tuple() == (0, 0, 37, 255)


def test_convolution_matrix_brings_its_own_normalisation(backend) -> None:
    buffer = _solid(1, 1, (100, 100, 100, 255))
    kernel = ConvolutionMatrix(IDENTITY, divisor=4, offset=1)

    convolution(buffer, kernel, divisor=100, offset=100, backend=backend)

    assert buffer.get(0, 0).as_tuple() == (26, 26, 26, 255)


def test_luminosity_one_is_identity(backend, random_buffer) -> None:
    buffer = _opaque(random_buffer())
    expected = buffer.copy()

    luminosity(buffer, 1.0, backend=backend)

    assert buffer == expected


def test_luminosity_half_halves_each_channel(backend) -> None:
    buffer = PixelBuffer(2, 1, [255, 3, 100, 255, 1, 0, 254, 255])

    luminosity(buffer, 0.5, backend=backend)

    assert buffer.data.tolist() == [127, 1, 50, 255, 0, 0, 127, 255]


def test_lighten_and_darken_move_in_opposite_directions(backend) -> None:
    light = lighten(_solid(3, 3, (100, 100, 100, 255)), backend=backend)
    dark = darken(_solid(3, 3, (100, 100, 100, 255)), backend=backend)

    assert light.get(1, 1).r > 100 > dark.get(1, 1).r


def test_normalised_kernels_keep_uniform_interiors(backend) -> None:
    for apply in (gaussian_blur, sharpen, emboss):
        buffer = apply(_solid(3, 3, (160, 80, 40, 255)), backend=backend)
        assert buffer.get(1, 1).as_tuple() == (160, 80, 40, 255)


def test_edge_trace_flattens_uniform_interiors(backend) -> None:
    buffer = edge_trace(_solid(3, 3, (160, 80, 40, 255)), backend=backend)

    assert buffer.get(1, 1).as_tuple() == (0, 0, 0, 255)
    assert buffer.get(0, 0).r == 255


def test_gaussian_blur_averages_with_weights(backend) -> None:
    buffer = _solid(3, 3, (0, 0, 0, 255))
    buffer.set(1, 1, (160, 160, 160, 255))

    gaussian_blur(buffer, backend=backend)

    assert buffer.get(1, 1).r == 40
    assert buffer.get(0, 1).r == 20
    assert buffer.get(0, 0).r == 10


def test_sharpen_saturates_instead_of_wrapping(backend) -> None:
    buffer = _solid(3, 3, (0, 0, 0, 255))
    buffer.set(1, 1, (255, 255, 255, 255))

    sharpen(buffer, backend=backend)

    assert buffer.data.dtype == np.uint8
    colours = buffer.data.reshape(3, 3, 4)[..., :3]
    # 5 * 255 at the centre and -255 beside it without clamping.
    np.testing.assert_array_equal(colours[1, 1], [255, 255, 255])
    colours[1, 1] = 0
    assert not colours.any()
