import pytest
from meshwall.colors.hex import hex_to_rgb, rgb_to_hex, is_hex_color, parse_css_hex
from meshwall.errors import InvalidColorWarning


@pytest.mark.parametrize("value, expected", [
    ("#ff0000", (255, 0, 0)),
    ("00ff00", (0, 255, 0)),
    ("#0000FF", (0, 0, 255)),
    ("#4ecdc4", (78, 205, 196)),
    ("A8E6CF", (168, 230, 207)),
])
def test_hex_to_rgb_valid(value, expected):
    assert hex_to_rgb(value) == expected


@pytest.mark.parametrize("value", ["#fff", "#ff00000", "red", "", "#gg0000", "##ff0000", "#ff0000\n", None, 0xff0000])
def test_hex_to_rgb_falls_back_to_black(value):
    """Malformed colors never raise; they become black and warn."""
    with pytest.warns(InvalidColorWarning):
        assert hex_to_rgb(value) == (0, 0, 0)


def test_is_hex_color():
    assert is_hex_color("#abcdef")
    assert is_hex_color("ABCDEF")
    assert not is_hex_color("#abc")
    assert not is_hex_color("#abcdef\n")
    assert not is_hex_color(None)


def test_rgb_to_hex_rounds_and_clamps():
    assert rgb_to_hex((255, 0, 0)) == "#ff0000"
    assert rgb_to_hex((127.5, 300, -4)) == "#80ff00"


def test_parse_css_hex_forms():
    assert parse_css_hex("#f00") == (255, 0, 0, 255)
    assert parse_css_hex("#f008") == (255, 0, 0, 136)
    assert parse_css_hex("#ff000080") == (255, 0, 0, 128)
    assert parse_css_hex("#FF0000") == (255, 0, 0, 255)
    assert parse_css_hex("ff0000") is None
    assert parse_css_hex("#ff00") == (255, 255, 0, 0)
    assert parse_css_hex("#ff000") is None
