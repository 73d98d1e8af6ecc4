from unittest.mock import MagicMock

import numpy as np
import pytest

from instafilter.catalog import FilterVariant, ParamKey
from instafilter.errors import NoSourceImage
from instafilter.normalize import NormalizedControls
from instafilter.pipeline import apply
from instafilter.session import (
    EditingSession, load_image, save, select_filter, set_control, set_intensity,
)


def test_new_session_has_nothing():
    s = EditingSession()
    assert not s.has_image
    assert not s.has_output
    assert s.variant is FilterVariant.SEPIA_TONE
    assert s.controls == NormalizedControls()


def test_cancelled_pick_keeps_session():
    s = EditingSession()
    assert load_image(s, None) is s


def test_load_image_computes_result(gradient_rgb):
    s = load_image(EditingSession(), gradient_rgb, path="photo.png")
    assert s.has_image and s.has_output
    assert s.source_path == "photo.png"
    expected = apply(s.variant, s.configuration.params, gradient_rgb)
    np.testing.assert_array_equal(s.result, expected)


def test_controls_change_without_image_gives_no_output():
    s = set_intensity(EditingSession(), 0.8)
    assert s.controls == NormalizedControls.uniform(0.8)
    assert s.result is None


def test_select_filter_recomputes_and_keeps_controls(gradient_rgb):
    s = load_image(EditingSession(), gradient_rgb)
    s = set_control(s, ParamKey.SCALE, 0.8)
    blurred = select_filter(s, FilterVariant.GAUSSIAN_BLUR)
    assert blurred.controls == s.controls
    expected = apply(FilterVariant.GAUSSIAN_BLUR, blurred.configuration.params, gradient_rgb)
    np.testing.assert_array_equal(blurred.result, expected)

    # back to pixellate: the scale set earlier still applies
    pix = select_filter(blurred, FilterVariant.PIXELLATE)
    assert pix.configuration.params == {ParamKey.SCALE: pytest.approx(8.0)}


def test_switching_back_reproduces_result(gradient_rgb):
    s = load_image(EditingSession(), gradient_rgb)
    first = s.result
    s = select_filter(s, FilterVariant.EDGES)
    s = select_filter(s, FilterVariant.SEPIA_TONE)
    np.testing.assert_array_equal(s.result, first)


def test_handlers_do_not_mutate_input(gradient_rgb):
    s = load_image(EditingSession(), gradient_rgb)
    s2 = set_control(s, ParamKey.INTENSITY, 0.1)
    assert s.controls.intensity == 0.5
    assert s2.controls.intensity == 0.1


def test_save_without_result_raises_and_skips_saver():
    saver = MagicMock()
    with pytest.raises(NoSourceImage, match="No Image selected"):
        save(EditingSession(), saver)
    saver.write_to_photo_album.assert_not_called()


def test_save_hands_result_to_saver(gradient_rgb):
    saver = MagicMock()
    s = load_image(EditingSession(), gradient_rgb)
    save(s, saver)
    saver.write_to_photo_album.assert_called_once()
    np.testing.assert_array_equal(saver.write_to_photo_album.call_args[0][0], s.result)


def test_serialization_round_trip(gradient_rgb):
    s = load_image(EditingSession(variant=FilterVariant.VIGNETTE), gradient_rgb, path="a.jpg")
    s = set_control(s, ParamKey.RADIUS, 0.25)
    data = s.to_dict()
    assert data == {
        "variant": "VIGNETTE",
        "controls": {"intensity": 0.5, "radius": 0.25, "scale": 0.5},
        "source_path": "a.jpg",
    }
    restored = EditingSession.from_dict(data)
    assert restored == s  # pixel buffers are not part of equality
    assert restored.source is None
