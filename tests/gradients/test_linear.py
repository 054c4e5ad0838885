import math
import numpy as np
import pytest
from meshwall.errors import InvalidGradientError
from meshwall.gradients import LinearGradient, is_valid_gradient, parse_linear_gradient
from meshwall.gradients.linear import ColorStop, interpolate_stops, linear_gradient, parse_color

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


class TestParsing:
    def test_default_direction_is_to_bottom(self):
        g = parse_linear_gradient("linear-gradient(#ff0000, #0000ff)")
        assert g.angle == 180.0
        assert g.corner is None
        assert [s.color for s in g.stops] == [RED, BLUE]

    @pytest.mark.parametrize("direction, angle", [
        ("90deg", 90.0),
        ("-90deg", -90.0),
        ("100grad", 90.0),
        ("0.25turn", 90.0),
        ("to right", 90.0),
        ("to top", 0.0),
        ("to left", 270.0),
    ])
    def test_directions(self, direction, angle):
        g = parse_linear_gradient(f"linear-gradient({direction}, #000, #fff)")
        assert g.angle == pytest.approx(angle)

    def test_radians(self):
        g = parse_linear_gradient(f"linear-gradient({math.pi}rad, #000, #fff)")
        assert g.angle == pytest.approx(180.0)

    def test_corner_direction(self):
        g = parse_linear_gradient("linear-gradient(to right top, #000, #fff)")
        assert g.angle is None
        assert g.corner == ("top", "right")

    @pytest.mark.parametrize("text, rgba", [
        ("#f00", (255, 0, 0, 255)),
        ("#f008", (255, 0, 0, 136)),
        ("#FF0000", RED),
        ("#ff000080", (255, 0, 0, 128)),
        ("transparent", (0, 0, 0, 0)),
        ("rgb(10, 20, 30)", (10, 20, 30, 255)),
        ("rgba(255, 0, 0, 0.5)", (255, 0, 0, 128)),
        ("rgb(100% 0% 50%)", (255, 0, 128, 255)),
        ("rgb(0 0 0 / 25%)", (0, 0, 0, 64)),
        ("red", RED),
        ("Navy", (0, 0, 128, 255)),
        ("orange", (255, 165, 0, 255)),
    ])
    def test_colors(self, text, rgba):
        assert parse_color(text) == rgba

    def test_named_color_stops(self):
        g = parse_linear_gradient("linear-gradient(45deg, red, blue 80%)")
        assert g.stops == (ColorStop(RED), ColorStop(BLUE, 0.8))
        assert not is_valid_gradient("linear-gradient(45deg, coral, blue)")

    def test_stop_positions(self):
        g = parse_linear_gradient("linear-gradient(90deg, rgb(255 0 0) 10%, #0000ff 75.5%)")
        assert g.stops[0] == ColorStop(RED, 0.1)
        assert g.stops[1].position == pytest.approx(0.755)

    def test_trailing_semicolon_and_case(self):
        assert is_valid_gradient("Linear-Gradient(to bottom, #000, #fff);")

    @pytest.mark.parametrize("text", [
        "radial-gradient(#000, #fff)",
        "linear-gradient(#000)",
        "linear-gradient(90deg)",
        "linear-gradient(to middle, #000, #fff)",
        "linear-gradient(to top bottom, #000, #fff)",
        "linear-gradient(#000, notacolor)",
        "linear-gradient(#000,, #fff)",
        "linear-gradient(rgb(1, 2, 3, #000)",
        "linear-gradient(#zzz, #fff)",
        "linear-gradient(rgb(1, 2), #fff)",
        "",
    ])
    def test_invalid(self, text):
        assert not is_valid_gradient(text)
        with pytest.raises(InvalidGradientError):
            parse_linear_gradient(text)

    def test_non_string(self):
        assert not is_valid_gradient(None)

    def test_css_round_trip(self):
        text = "linear-gradient(45deg, #ff0000, #0000ff80 80%)"
        g = parse_linear_gradient(text)
        assert g.to_css() == text
        assert parse_linear_gradient(g.to_css()) == g

    def test_corner_to_css(self):
        g = parse_linear_gradient("linear-gradient(to bottom left, #000, #fff)")
        assert g.to_css() == "linear-gradient(to bottom left, #000000, #ffffff)"


class TestStops:
    @pytest.mark.parametrize("positions, expected", [
        ([None, None, None], [0.0, 0.5, 1.0]),
        ([0.3, None, None, 0.9], [0.3, 0.5, 0.7, 0.9]),
        ([None, 0.2, None, 0.1, None], [0.0, 0.2, 0.2, 0.2, 1.0]),
        ([0.5, 0.5], [0.5, 0.5]),
    ])
    def test_resolved_positions(self, positions, expected):
        g = LinearGradient(stops=tuple(ColorStop(RED, p) for p in positions))
        assert np.allclose(g.resolved_positions(), expected)

    def test_needs_two_stops(self):
        with pytest.raises(InvalidGradientError):
            LinearGradient(stops=(ColorStop(RED),))

    def test_premultiplied_interpolation(self):
        out = interpolate_stops(
            np.array([0.0, 1.0]),
            np.array([[255, 0, 0, 255], [0, 0, 0, 0]], dtype=np.float64),
            np.array([0.5]),
        )
        assert out[0] == pytest.approx([255.0, 0.0, 0.0, 127.5])

    def test_hard_stop_later_color_wins(self):
        out = interpolate_stops(
            np.array([0.0, 0.5, 0.5, 1.0]),
            np.array([RED, RED, BLUE, BLUE], dtype=np.float64),
            np.array([0.25, 0.5, 0.75]),
        )
        assert out[0] == pytest.approx(RED)
        assert out[1] == pytest.approx(BLUE)
        assert out[2] == pytest.approx(BLUE)

    def test_outside_range_takes_end_colors(self):
        out = interpolate_stops(
            np.array([0.25, 0.75]),
            np.array([RED, BLUE], dtype=np.float64),
            np.array([0.0, 1.0]),
        )
        assert out[0] == pytest.approx(RED)
        assert out[1] == pytest.approx(BLUE)

    def test_ramp_endpoints(self):
        ramp = linear_gradient(["#ff0000", "#0000ff"]).ramp(64)
        assert ramp.shape == (64, 4)
        assert np.allclose(ramp[0], RED, atol=1)
        assert np.allclose(ramp[-1], BLUE, atol=1)


class TestRender:
    def test_to_bottom(self):
        target = parse_linear_gradient("linear-gradient(#ff0000, #0000ff)").render(3, 64)
        top, bottom = target.pixel(1, 0), target.pixel(1, 63)
        assert top[0] > 240 and top[2] < 15
        assert bottom[2] > 240 and bottom[0] < 15
        # Constant along each row.
        arr = target.to_array()
        assert np.all(arr[:, 0] == arr[:, 2])

    def test_hard_stop_halves(self):
        target = parse_linear_gradient("linear-gradient(90deg, #ff0000 50%, #0000ff 50%)").render(4, 2)
        for y in range(2):
            assert target.pixel(0, y) == RED
            assert target.pixel(1, y) == RED
            assert target.pixel(2, y) == BLUE
            assert target.pixel(3, y) == BLUE

    def test_corner_angle_follows_aspect(self):
        g = parse_linear_gradient("linear-gradient(to top right, #000, #fff)")
        assert g.angle_for(100, 100) == pytest.approx(45.0)
        assert g.angle_for(200, 100) == pytest.approx(math.degrees(math.atan2(100, 200)))
        assert parse_linear_gradient("linear-gradient(to bottom left, #000, #fff)").angle_for(100, 100) == \
            pytest.approx(225.0)

    def test_corner_render_reaches_corners(self):
        target = parse_linear_gradient("linear-gradient(to top right, #000000, #ffffff)").render(40, 20)
        assert target.pixel(0, 19)[0] < 10
        assert target.pixel(39, 0)[0] > 245

    def test_transparent_fade_keeps_hue(self):
        target = parse_linear_gradient("linear-gradient(90deg, #ff000000, #ff0000)").render(8, 1)
        for x in range(1, 8):
            r, g, b, a = target.pixel(x, 0)
            assert (r, g, b) == (255, 0, 0)
        alphas = [target.pixel(x, 0)[3] for x in range(8)]
        assert alphas == sorted(alphas)

    def test_angle_wraps(self):
        a = linear_gradient(["#ff0000", "#0000ff"], 90).render(10, 4)
        b = linear_gradient(["#ff0000", "#0000ff"], 450).render(10, 4)
        assert a == b
