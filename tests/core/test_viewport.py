from __future__ import annotations

import itertools

import pytest

from engine.core.errors import InvalidInputError, LetterboxError
from engine.core.viewport import (
    FULL_SCREEN,
    AspectRatio,
    ViewportRect,
    bar_regions,
    clamp01,
    compute_viewport,
    is_close,
)


def _approx(rect: ViewportRect, expected: tuple[float, float, float, float], abs_=1e-3) -> bool:
    return rect.as_tuple() == pytest.approx(expected, abs=abs_)


def test_letterbox_for_16_9_screen_and_21_9_target() -> None:
    rect = compute_viewport(16, 9, 21 / 9, 1.0)
    assert _approx(rect, (0.0, 0.119, 1.0, 0.762))
    assert rect.height == pytest.approx(16 / 21)
    assert rect.y == pytest.approx(5 / 42)


def test_pillarbox_for_32_9_screen_and_21_9_target() -> None:
    rect = compute_viewport(32, 9, 21 / 9, 1.0)
    assert _approx(rect, (0.172, 0.0, 0.656, 1.0))
    assert rect.width == pytest.approx(21 / 32)
    assert rect.x == pytest.approx(0.171875)


def test_blend_zero_is_exactly_full_screen() -> None:
    for w, h, ratio in [(16, 9, (21, 9)), (32, 9, (21, 9)), (3, 4, (1, 1)), (1, 1000, (1000, 1))]:
        assert compute_viewport(w, h, ratio, 0.0) == FULL_SCREEN


def test_matching_ratio_is_full_screen_regardless_of_blend() -> None:
    for blend in (0.0, 0.3, 1.0):
        assert compute_viewport(1920, 1080, (16, 9), blend) == FULL_SCREEN
        assert compute_viewport(2560, 1080, AspectRatio(64, 27), blend) == FULL_SCREEN


def test_near_equal_ratio_uses_relative_tolerance() -> None:
    # 相対差 ~6e-7 は一致扱い
    assert compute_viewport(1920, 1080, (16.00001, 9), 1.0) == FULL_SCREEN
    # 相対差 ~6e-4 は不一致
    assert compute_viewport(1920, 1080, (16.01, 9), 1.0) != FULL_SCREEN
    # 許容誤差を広げれば一致扱い
    assert compute_viewport(1920, 1080, (16.01, 9), 1.0, tolerance=1e-2) == FULL_SCREEN


def test_half_blend_interpolates_each_component() -> None:
    rect = compute_viewport(16, 9, (21, 9), 0.5)
    nh = 16 / 21
    assert rect.x == pytest.approx(0.0)
    assert rect.width == pytest.approx(1.0)
    assert rect.y == pytest.approx((1 - nh) / 4)
    assert rect.height == pytest.approx(1 + (nh - 1) * 0.5)


def test_blend_outside_range_is_clamped_not_rejected() -> None:
    assert compute_viewport(16, 9, (21, 9), 5.0) == compute_viewport(16, 9, (21, 9), 1.0)
    assert compute_viewport(16, 9, (21, 9), -2.0) == FULL_SCREEN


@pytest.mark.parametrize(
    "screen,ratio",
    [((0, 1080), (21, 9)), ((1920, 0), (21, 9)), ((-5, 10), (21, 9)), ((1920, 1080), (0, 9)), ((1920, 1080), (21, -9)), ((1920, 1080), -1.0)],
)
def test_invalid_inputs_raise(screen, ratio) -> None:  # noqa: ANN001
    with pytest.raises(InvalidInputError):
        compute_viewport(screen[0], screen[1], ratio, 1.0)


def test_invalid_input_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        compute_viewport(0, 0, (21, 9), 1.0)
    assert issubclass(InvalidInputError, LetterboxError)


def test_rect_always_within_unit_square() -> None:
    sizes = [1, 3, 9, 16, 640, 1080, 1920, 7680]
    ratios = [(1, 1000), (1, 1), (4, 3), (16, 9), (21, 9), (1000, 1)]
    blends = [0.0, 0.25, 0.5, 1.0]
    for w, h, ratio, blend in itertools.product(sizes, sizes, ratios, blends):
        rect = compute_viewport(w, h, ratio, blend)
        for v in rect.as_tuple():
            assert 0.0 <= v <= 1.0
        assert rect.x + rect.width <= 1.0 + 1e-12
        assert rect.y + rect.height <= 1.0 + 1e-12


def test_compute_is_pure_and_repeatable() -> None:
    a = compute_viewport(1366, 768, (21, 9), 0.37)
    b = compute_viewport(1366, 768, (21, 9), 0.37)
    assert a == b
    assert a.as_tuple() == b.as_tuple()


def test_aspect_ratio_coerce_variants() -> None:
    assert AspectRatio.coerce("21:9") == AspectRatio(21, 9)
    assert AspectRatio.coerce("16/9") == AspectRatio(16, 9)
    assert AspectRatio.coerce([4, 3]) == AspectRatio(4, 3)
    assert AspectRatio.coerce(2.5).ratio == pytest.approx(2.5)
    r = AspectRatio(21, 9)
    assert AspectRatio.coerce(r) is r
    assert str(r) == "21:9"


@pytest.mark.parametrize("value", ["wide", "1:2:3", (1, 2, 3), True, None, "0:9"])
def test_aspect_ratio_coerce_rejects(value) -> None:  # noqa: ANN001
    with pytest.raises(InvalidInputError):
        AspectRatio.coerce(value)


def test_to_pixels_rounds_and_stays_inside() -> None:
    assert FULL_SCREEN.to_pixels(1920, 1080) == (0, 0, 1920, 1080)
    rect = compute_viewport(1920, 1080, (21, 9), 1.0)
    assert rect.to_pixels(1920, 1080) == (0, 129, 1920, 823)
    assert FULL_SCREEN.to_pixels(0, 0) == (0, 0, 0, 0)
    tiny = ViewportRect(0.5, 0.5, 0.0001, 0.0001)
    assert tiny.to_pixels(10, 10) == (5, 5, 1, 1)


def test_bar_regions_complement_viewport() -> None:
    assert bar_regions(FULL_SCREEN) == []

    letter = compute_viewport(16, 9, (21, 9), 1.0)
    bars = bar_regions(letter)
    assert len(bars) == 2
    bottom, top = bars
    assert bottom.y == 0.0
    assert bottom.height == pytest.approx(5 / 42)
    assert top.y + top.height == pytest.approx(1.0)

    pillar = compute_viewport(32, 9, (21, 9), 1.0)
    left, right = bar_regions(pillar)
    assert left.width == pytest.approx(0.171875)
    assert right.x + right.width == pytest.approx(1.0)


def test_helpers() -> None:
    assert clamp01(-1) == 0.0
    assert clamp01(2) == 1.0
    assert clamp01(float("nan")) == 0.0
    assert is_close(1.0, 1.000001)
    assert not is_close(1.0, 1.001)
