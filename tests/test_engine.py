from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from fuzzy_filters import EngineConfig, FilterSession, PixelBuffer, open_session
from fuzzy_filters.core.values import Channel, Direction
from fuzzy_filters.utils import logging as logging_utils

CONFIG = EngineConfig(backend="jit")


def _image(size=(4, 3), colour=(200, 100, 50, 255)) -> Image.Image:
    return Image.new("RGBA", size, colour)


def test_unsupported_sources_yield_none() -> None:
    assert open_session("not an image", config=CONFIG) is None
    assert open_session(np.zeros((2, 2), dtype=np.uint8), config=CONFIG) is None


def test_filters_chain_fluently() -> None:
    session = open_session(_image(), config=CONFIG)
    assert isinstance(session, FilterSession)

    result = (
        session.color_filter(Channel.RED)
        .invert(Channel.GREEN)
        .greyscale()
        .pixelate(2)
        .box_blur(2)
        .motion_blur(2, Direction.VERTICAL)
        .window_blur(1, 1)
        .convolution([[0, 0, 0], [0, 1, 0], [0, 0, 0]])
        .gaussian_blur()
        .emboss()
        .sharpen()
        .edge_trace()
        .luminosity(0.5)
        .lighten()
        .darken()
    )

    assert result is session
    assert session.buffer.data.size == 4 * 3 * 4


def test_sessions_own_independent_buffers() -> None:
    source = PixelBuffer(2, 2, np.full(16, 100))
    first = open_session(source, config=CONFIG)
    second = open_session(source, config=CONFIG)

    first.invert()

    assert second.buffer == source
    assert first.buffer != source
    assert source.get(0, 0).r == 100


def test_snapshot_is_detached() -> None:
    session = FilterSession(PixelBuffer(1, 1, [1, 2, 3, 4]), config=CONFIG)
    snapshot = session.snapshot()

    session.invert()

    assert snapshot.get(0, 0).as_tuple() == (1, 2, 3, 4)


def test_draw_returns_a_native_size_rendering_without_touching_the_source() -> None:
    image = _image()
    session = open_session(image, config=CONFIG)

    rendered = session.invert().draw()

    assert rendered.size == (4, 3)
    assert rendered.getpixel((0, 0)) == (55, 155, 205, 255)
    assert image.getpixel((0, 0)) == (200, 100, 50, 255)


def test_draw_overwrite_writes_back_into_the_source() -> None:
    image = _image()

    open_session(image, config=CONFIG).color_filter("blue").draw(overwrite=True)

    assert image.getpixel((2, 1)) == (0, 0, 50, 255)


def test_draw_into_target_and_callback() -> None:
    target = Image.new("RGB", (8, 6))
    received = []
    session = open_session(_image(), config=CONFIG).greyscale()

    session.draw(target, width=2, callback=received.append)

    grey = (200 * 299 + 100 * 587 + 50 * 114) // 1000
    assert target.getpixel((5, 5)) == (grey, grey, grey)
    assert received[0].size == (2, 1)


def test_scale_resolves_missing_dimensions() -> None:
    session = open_session(_image((8, 4)), config=CONFIG)

    assert session.scale().size == (8, 4)
    assert session.scale(4).size == (4, 2)
    assert session.scale(height=2).size == (4, 2)
    assert session.scale(3, 9).size == (3, 9)
    assert session.scale("wide", 0).size == (8, 4)


def test_array_sources_round_trip() -> None:
    array = np.zeros((2, 3, 3), dtype=np.uint8)
    array[..., 0] = 120

    session = open_session(array, config=CONFIG)
    session.invert(Channel.RED).draw(overwrite=True)

    assert array[0, 0].tolist() == [120, 255, 255]
    assert session.draw().shape == (2, 3, 4)


def test_later_sessions_leave_the_package_log_level_alone(monkeypatch) -> None:
    package_logger = logging.getLogger("fuzzy_filters")
    monkeypatch.setattr(logging_utils, "_LOGGER", None)
    monkeypatch.setattr(package_logger, "level", package_logger.level)

    open_session(PixelBuffer(1, 1), config=EngineConfig(backend="python", log_level="DEBUG"))
    open_session(PixelBuffer(1, 1), config=EngineConfig(backend="python", log_level="ERROR"))

    assert package_logger.level == logging.DEBUG
