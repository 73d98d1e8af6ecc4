import pytest

from instafilter.catalog import FilterVariant, ParamKey
from instafilter.normalize import FilterConfiguration, NormalizedControls, configure, normalize


@pytest.mark.parametrize("variant", list(FilterVariant))
@pytest.mark.parametrize("controls", [
    NormalizedControls(),
    NormalizedControls(intensity=0.0, radius=1.0, scale=0.25),
    NormalizedControls.uniform(0.9),
])
def test_output_keys_match_accepted_keys(variant, controls):
    assert set(normalize(variant, controls)) == set(variant.accepted_keys)


def test_sepia_intensity_is_identity():
    params = normalize(FilterVariant.SEPIA_TONE, NormalizedControls(intensity=0.5))
    assert params == {ParamKey.INTENSITY: 0.5}


def test_gaussian_radius_times_200():
    params = normalize(FilterVariant.GAUSSIAN_BLUR, NormalizedControls(radius=0.5))
    assert params == {ParamKey.RADIUS: pytest.approx(100.0)}


def test_pixellate_scale_times_10():
    params = normalize(FilterVariant.PIXELLATE, NormalizedControls(scale=0.3))
    assert params[ParamKey.SCALE] == pytest.approx(3.0)


def test_radius_and_scale_are_linear():
    a = NormalizedControls(intensity=0.2, radius=0.2, scale=0.2)
    b = NormalizedControls(intensity=0.4, radius=0.4, scale=0.4)
    assert normalize(FilterVariant.GAUSSIAN_BLUR, b)[ParamKey.RADIUS] == pytest.approx(
        2 * normalize(FilterVariant.GAUSSIAN_BLUR, a)[ParamKey.RADIUS])
    assert normalize(FilterVariant.PIXELLATE, b)[ParamKey.SCALE] == pytest.approx(
        2 * normalize(FilterVariant.PIXELLATE, a)[ParamKey.SCALE])


def test_two_key_variant_uses_independent_controls():
    controls = NormalizedControls(intensity=0.8, radius=0.1)
    params = normalize(FilterVariant.UNSHARP_MASK, controls)
    assert params[ParamKey.INTENSITY] == pytest.approx(0.8)
    assert params[ParamKey.RADIUS] == pytest.approx(20.0)


def test_out_of_range_values_pass_through():
    params = normalize(FilterVariant.GAUSSIAN_BLUR, NormalizedControls(radius=1.5))
    assert params[ParamKey.RADIUS] == pytest.approx(300.0)
    params = normalize(FilterVariant.EDGES, NormalizedControls(intensity=-0.5))
    assert params[ParamKey.INTENSITY] == pytest.approx(-0.5)


def test_uniform_and_with_value():
    c = NormalizedControls.uniform(0.3)
    assert c.intensity == c.radius == c.scale == 0.3
    c2 = c.with_value(ParamKey.SCALE, 0.9)
    assert c2.scale == 0.9 and c2.intensity == 0.3
    assert c.scale == 0.3  # original untouched


def test_controls_dict_round_trip_ignores_unknown():
    c = NormalizedControls.from_dict({"intensity": 0.1, "radius": 0.2, "scale": 0.3, "hue": 1.0})
    assert c.to_dict() == {"intensity": 0.1, "radius": 0.2, "scale": 0.3}


def test_configure():
    cfg = configure(FilterVariant.VIGNETTE, NormalizedControls.uniform(0.5))
    assert isinstance(cfg, FilterConfiguration)
    assert cfg.variant is FilterVariant.VIGNETTE
    assert cfg.params == {ParamKey.INTENSITY: 0.5, ParamKey.RADIUS: pytest.approx(100.0)}
